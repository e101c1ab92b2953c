#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/diff/lcs.py
"""Minimal edit scripts between two token sequences.

Implements Myers' O(ND) shortest-edit-script search. A shortest edit
script keeps a longest common subsequence of the inputs, so no line (or
word, or character) shared by both sides is reported as removed and added
again.

The result uses the opcode shape of :meth:`difflib.SequenceMatcher.get_opcodes`:
``(tag, i1, i2, j1, j2)`` with ``tag`` one of ``equal``, ``replace``,
``delete`` or ``insert``. Within a change, deletions come before insertions.

Examples
--------
    >>> get_opcodes(["b", "c", "b"], ["c", "a", "b"])
    [('delete', 0, 1, 0, 0), ('equal', 1, 2, 0, 1), ('insert', 2, 2, 1, 2), ('equal', 2, 3, 2, 3)]

"""

from __future__ import annotations

from typing import Hashable, Sequence

Opcode = tuple[str, int, int, int, int]


def _common_prefix(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    limit = min(len(a), len(b))
    count = 0
    while count < limit and a[count] == b[count]:
        count += 1
    return count


def _common_suffix(a: Sequence[Hashable], b: Sequence[Hashable], prefix: int) -> int:
    limit = min(len(a), len(b)) - prefix
    count = 0
    while count < limit and a[len(a) - 1 - count] == b[len(b) - 1 - count]:
        count += 1
    return count


def _myers_matches(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[tuple[int, int]]:
    """Return the matched index pairs of a shortest edit script, in order.

    The part of the furthest-reaching frontier that round ``d`` reads
    (diagonals ``-d-1`` to ``d+1``) is kept for every round so that the path
    can be walked back afterwards; memory grows with ``d`` squared.
    """
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return []

    offset = n + m + 1
    frontier = [0] * (2 * offset + 1)
    trace: list[list[int]] = []

    for d in range(n + m + 1):
        trace.append(frontier[offset - d - 1 : offset + d + 2])
        done = False
        for k in range(-d, d + 1, 2):
            # Prefer extending a deletion (move right) on ties
            if k == -d or (k != d and frontier[offset + k - 1] < frontier[offset + k + 1]):
                x = frontier[offset + k + 1]
            else:
                x = frontier[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            frontier[offset + k] = x
            if x >= n and y >= m:
                done = True
                break
        if done:
            break

    matches: list[tuple[int, int]] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        snapshot = trace[d]
        k = x - y
        if k == -d or (k != d and snapshot[k + d] < snapshot[k + d + 2]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = snapshot[prev_k + d + 1]
        prev_y = prev_x - prev_k
        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            matches.append((x, y))
        x, y = prev_x, prev_y
    matches.reverse()
    return matches


def get_opcodes(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[Opcode]:
    """Describe how to turn ``a`` into ``b`` with a minimal number of edits.

    Parameters
    ----------
    a : sequence of hashable
        Old tokens
    b : sequence of hashable
        New tokens

    Returns
    -------
    list of (str, int, int, int, int)
        Opcodes covering both sequences completely, in order. The ``equal``
        opcodes together span a longest common subsequence.

    """
    prefix = _common_prefix(a, b)
    suffix = _common_suffix(a, b, prefix)
    middle = _myers_matches(a[prefix : len(a) - suffix], b[prefix : len(b) - suffix])

    pairs = [(i, i) for i in range(prefix)]
    pairs.extend((i + prefix, j + prefix) for i, j in middle)
    pairs.extend((len(a) - suffix + i, len(b) - suffix + i) for i in range(suffix))
    # Sentinel closes the last change
    pairs.append((len(a), len(b)))

    opcodes: list[Opcode] = []
    i = j = 0
    for match_i, match_j in pairs:
        if i < match_i and j < match_j:
            opcodes.append(("replace", i, match_i, j, match_j))
        elif i < match_i:
            opcodes.append(("delete", i, match_i, j, j))
        elif j < match_j:
            opcodes.append(("insert", i, i, j, match_j))
        if match_i == len(a) and match_j == len(b):
            break
        if opcodes and opcodes[-1][0] == "equal" and opcodes[-1][2] == match_i and opcodes[-1][4] == match_j:
            tag, i1, _, j1, _ = opcodes[-1]
            opcodes[-1] = (tag, i1, match_i + 1, j1, match_j + 1)
        else:
            opcodes.append(("equal", match_i, match_i + 1, match_j, match_j + 1))
        i, j = match_i + 1, match_j + 1
    return opcodes
