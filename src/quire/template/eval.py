"""Expression evaluation."""

from __future__ import annotations

import math
from functools import singledispatch

from quire.value import Number, Value, truthy
from quire.value.number import I64_MAX, I64_MIN, NumberKind

from . import ast
from .errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    EvalError,
    IndexOutOfBoundsError,
    InvalidIndexError,
    NotCallableError,
    SpanError,
    UndefinedFieldError,
    UndefinedPipeError,
    UndefinedVariableError,
    ValueTypeError,
)
from .scope import Scope


def eval_expr(expr: ast.Expr, scope: Scope) -> Value:
    """Evaluate ``expr``; the innermost failing expression tags the error with its span."""
    try:
        return evaluate(expr, scope)
    except SpanError:
        raise
    except EvalError as err:
        raise SpanError(err, expr.span) from err


@singledispatch
def evaluate(expr: ast.Expr, scope: Scope) -> Value:
    raise TypeError(f"cannot evaluate {type(expr).__name__}")


@evaluate.register
def _(expr: ast.ValueExpr, scope: Scope) -> Value:
    return expr.value


@evaluate.register
def _(expr: ast.IdentExpr, scope: Scope) -> Value:
    value = scope.var(expr.name)
    if value is None:
        raise UndefinedVariableError(expr.name)
    return value


@evaluate.register
def _(expr: ast.MemberExpr, scope: Scope) -> Value:
    target = eval_expr(expr.object, scope)
    if not target.is_struct():
        raise ValueTypeError("struct", target.type_name)
    value = target.as_struct().field(expr.name)
    if value is None:
        raise UndefinedFieldError(expr.name)
    return value


@evaluate.register
def _(expr: ast.IndexExpr, scope: Scope) -> Value:
    target = eval_expr(expr.object, scope)
    if not target.is_array():
        raise ValueTypeError("array", target.type_name)

    index = eval_expr(expr.index, scope)
    if not index.is_number():
        raise ValueTypeError("integer", index.type_name)
    number = index.as_number()
    if number.is_float() or number.value < 0:
        raise InvalidIndexError()

    array = target.as_array()
    item = array.index(number.value)
    if item is None:
        raise IndexOutOfBoundsError(number.value, len(array))
    return item


@evaluate.register
def _(expr: ast.CallExpr, scope: Scope) -> Value:
    if not isinstance(expr.callee, ast.IdentExpr):
        raise NotCallableError()
    func = scope.func(expr.callee.name)
    if func is None:
        raise NotCallableError()
    args = [eval_expr(arg, scope) for arg in expr.args]
    return func.invoke(args)


@evaluate.register
def _(expr: ast.PipeExpr, scope: Scope) -> Value:
    value = eval_expr(expr.value, scope)
    args = [eval_expr(arg, scope) for arg in expr.args]
    pipe = scope.pipe(expr.name)
    if pipe is None:
        raise UndefinedPipeError(expr.name)
    return pipe.invoke(value, args)


@evaluate.register
def _(expr: ast.ArrayExpr, scope: Scope) -> Value:
    return Value.from_array(eval_expr(item, scope) for item in expr.items)


@evaluate.register
def _(expr: ast.ObjectExpr, scope: Scope) -> Value:
    return Value.from_struct((key, eval_expr(value, scope)) for key, value in expr.entries)


@evaluate.register
def _(expr: ast.MatchExpr, scope: Scope) -> Value:
    subject = eval_expr(expr.expr, scope)
    for arm in expr.arms:
        if eval_expr(arm.pattern, scope) == subject:
            return eval_expr(arm.body, scope)
    if expr.default is not None:
        return eval_expr(expr.default, scope)
    return Value.null()


@evaluate.register
def _(expr: ast.UnaryExpr, scope: Scope) -> Value:
    operand = eval_expr(expr.operand, scope)
    if expr.op is ast.UnaryOp.NOT:
        return Value.from_bool(not truthy(operand))
    return negate(operand)


@evaluate.register
def _(expr: ast.BinaryExpr, scope: Scope) -> Value:
    op = expr.op
    left = eval_expr(expr.left, scope)

    if op is ast.BinaryOp.AND:
        return eval_expr(expr.right, scope) if truthy(left) else left
    if op is ast.BinaryOp.OR:
        return left if truthy(left) else eval_expr(expr.right, scope)

    right = eval_expr(expr.right, scope)
    return binary(op, left, right)


# =============================================================================
# Operators
# =============================================================================


def negate(value: Value) -> Value:
    if not value.is_number():
        raise ValueTypeError("number", value.type_name)
    number = value.as_number()
    if number.is_float():
        return Value.from_number(Number(-number.value, number.kind))
    result = -number.value
    if not I64_MIN <= result <= I64_MAX:
        raise ArithmeticOverflowError()
    return Value.from_i64(result)


def binary(op: ast.BinaryOp, left: Value, right: Value) -> Value:
    if op is ast.BinaryOp.EQ:
        return Value.from_bool(left == right)
    if op is ast.BinaryOp.NE:
        return Value.from_bool(left != right)
    if op in (ast.BinaryOp.LT, ast.BinaryOp.LE, ast.BinaryOp.GT, ast.BinaryOp.GE):
        return Value.from_bool(compare(op, left, right))
    if op is ast.BinaryOp.ADD and (left.is_string() or right.is_string()):
        return Value.from_str(f"{left}{right}")
    return arithmetic(op, left, right)


def compare(op: ast.BinaryOp, left: Value, right: Value) -> bool:
    if left.is_number() and right.is_number():
        a, b = left.to_float(), right.to_float()
        if math.isnan(a) or math.isnan(b):
            return False
        order = (a > b) - (a < b)
    else:
        order = left.partial_cmp(right)
        if order is None:
            return False

    if op is ast.BinaryOp.LT:
        return order < 0
    if op is ast.BinaryOp.LE:
        return order <= 0
    if op is ast.BinaryOp.GT:
        return order > 0
    return order >= 0


def arithmetic(op: ast.BinaryOp, left: Value, right: Value) -> Value:
    for operand in (left, right):
        if not operand.is_number():
            raise ValueTypeError("number", operand.type_name)

    a, b = left.as_number(), right.as_number()
    if a.is_float() or b.is_float():
        return Value.from_f64(_float_op(op, a.to_float(), b.to_float()))

    x, y = a.value, b.value
    if x > I64_MAX or y > I64_MAX:
        raise ArithmeticOverflowError()
    result = _int_op(op, x, y)
    if not I64_MIN <= result <= I64_MAX:
        raise ArithmeticOverflowError()
    return Value.from_number(Number(result, NumberKind.I64))


def _float_op(op: ast.BinaryOp, x: float, y: float) -> float:
    if op is ast.BinaryOp.ADD:
        return x + y
    if op is ast.BinaryOp.SUB:
        return x - y
    if op is ast.BinaryOp.MUL:
        return x * y
    if y == 0:
        raise DivisionByZeroError()
    if op is ast.BinaryOp.DIV:
        return x / y
    return math.fmod(x, y)


def _int_op(op: ast.BinaryOp, x: int, y: int) -> int:
    if op is ast.BinaryOp.ADD:
        return x + y
    if op is ast.BinaryOp.SUB:
        return x - y
    if op is ast.BinaryOp.MUL:
        return x * y
    if y == 0:
        raise DivisionByZeroError()
    if x == I64_MIN and y == -1:
        raise ArithmeticOverflowError()
    # truncate toward zero; the remainder takes the sign of the dividend
    quotient = abs(x) // abs(y)
    if (x < 0) != (y < 0):
        quotient = -quotient
    if op is ast.BinaryOp.DIV:
        return quotient
    return x - y * quotient
