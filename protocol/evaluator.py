"""Arithmetic evaluation of a decoded packet tree.

Literals evaluate to their value. Operators reduce their evaluated children:

    SUM           sum of children
    PRODUCT       product of children
    MINIMUM       smallest child
    MAXIMUM       largest child
    GREATER_THAN  1 if first > second else 0
    LESS_THAN     1 if first < second else 0
    EQUAL_TO      1 if first == second else 0

Comparisons take exactly two children. Python ints are unbounded, so deeply
nested sums and products cannot overflow.
"""

import math
import operator
from typing import Callable

from primitives.errors import InvalidArity
from protocol.packet import COMPARISON_ARITY, Literal, OperatorKind, Packet

_REDUCERS: dict[OperatorKind, Callable[[list[int]], int]] = {
    OperatorKind.SUM: sum,
    OperatorKind.PRODUCT: math.prod,
    OperatorKind.MINIMUM: min,
    OperatorKind.MAXIMUM: max,
}

_COMPARISONS: dict[OperatorKind, Callable[[int, int], bool]] = {
    OperatorKind.GREATER_THAN: operator.gt,
    OperatorKind.LESS_THAN: operator.lt,
    OperatorKind.EQUAL_TO: operator.eq,
}


def evaluate(packet: Packet) -> int:
    """Compute the arithmetic value of a packet tree.

    The tree is walked in post-order with an explicit stack, so arbitrarily
    deep trees evaluate without touching the interpreter's recursion limit.

    Raises:
        InvalidArity: If a comparison operator does not have exactly two children
    """
    values: list[int] = []
    pending: list[tuple[Packet, bool]] = [(packet, False)]

    while pending:
        node, children_done = pending.pop()
        body = node.body
        if isinstance(body, Literal):
            values.append(body.value)
            continue

        op = body.op
        if not children_done:
            if op in _COMPARISONS and len(body.children) != COMPARISON_ARITY:
                raise InvalidArity(
                    f"{op.name} needs {COMPARISON_ARITY} children, got {len(body.children)}",
                    op=op.name,
                    arity=len(body.children),
                )
            pending.append((node, True))
            # reversed so children are evaluated, and their values stacked, in order
            pending.extend((child, False) for child in reversed(body.children))
            continue

        n_children = len(body.children)
        operands = values[-n_children:]
        del values[-n_children:]
        if op in _COMPARISONS:
            left, right = operands
            values.append(int(_COMPARISONS[op](left, right)))
        else:
            values.append(_REDUCERS[op](operands))

    return values[0]
