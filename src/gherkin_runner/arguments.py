from __future__ import annotations

import functools
import inspect
import logging
import math
import re
import struct

from enum import Enum
from typing import Any, Callable, Dict, List, NewType, Sequence, Tuple

from gherkin_runner.exceptions import ArgumentError, StepDefinitionError


logger = logging.getLogger(__name__)


int8 = NewType('int8', int)
int16 = NewType('int16', int)
int32 = NewType('int32', int)
int64 = NewType('int64', int)
float32 = NewType('float32', float)
float64 = NewType('float64', float)


class ArgumentKind(Enum):
    BOOL = 'bool'
    INT8 = 'int8'
    INT16 = 'int16'
    INT32 = 'int32'
    INT64 = 'int64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    STRING = 'string'


ANNOTATION_KINDS: Dict[Any, ArgumentKind] = {
    bool: ArgumentKind.BOOL,
    int8: ArgumentKind.INT8,
    int16: ArgumentKind.INT16,
    int32: ArgumentKind.INT32,
    int64: ArgumentKind.INT64,
    int: ArgumentKind.INT64,
    float32: ArgumentKind.FLOAT32,
    float64: ArgumentKind.FLOAT64,
    float: ArgumentKind.FLOAT64,
    str: ArgumentKind.STRING,
}

INTEGER_BITS: Dict[ArgumentKind, int] = {
    ArgumentKind.INT8: 8,
    ArgumentKind.INT16: 16,
    ArgumentKind.INT32: 32,
    ArgumentKind.INT64: 64,
}

BOOL_LITERALS: Dict[str, bool] = {
    '1': True,
    't': True,
    'T': True,
    'TRUE': True,
    'true': True,
    'True': True,
    '0': False,
    'f': False,
    'F': False,
    'FALSE': False,
    'false': False,
    'False': False,
}

PATTERN_INTEGER = re.compile(r'^[+-]?[0-9]+$')


def _get_handler_name(handler: Callable[..., Any]) -> str:
    return getattr(handler, '__name__', None) or repr(handler)


def _get_handler_namespace(handler: Callable[..., Any]) -> Dict[str, Any]:
    """Globals that postponed annotations of `handler` are resolved in."""
    if isinstance(handler, functools.partial):
        return _get_handler_namespace(handler.func)

    if not (inspect.isfunction(handler) or inspect.ismethod(handler)):
        # callable object, the annotations are on its __call__
        handler = getattr(type(handler), '__call__', handler)

    return getattr(inspect.unwrap(handler), '__globals__', {})


def _resolve_annotation(annotation: Any, namespace: Dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation

    # postponed with `from __future__ import annotations`
    return eval(annotation, dict(namespace))


def get_argument_kinds(handler: Callable[..., Any]) -> List[ArgumentKind]:
    """Build the argument descriptor of a step handler from its annotations.

    The first parameter always receives the `World` and is not part of the descriptor,
    its annotation is never resolved. Parameters without annotation are passed as strings.
    """
    name = _get_handler_name(handler)

    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError, NameError) as e:
        raise StepDefinitionError(f'unable to inspect step handler {name}') from e

    parameters = list(signature.parameters.values())

    for parameter in parameters:
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD, inspect.Parameter.KEYWORD_ONLY):
            raise StepDefinitionError(f'step handler {name} can only have positional parameters')

    if len(parameters) < 1:
        raise StepDefinitionError(f'step handler {name} must accept the world as first parameter')

    namespace = _get_handler_namespace(handler)
    kinds: List[ArgumentKind] = []

    for parameter in parameters[1:]:
        if parameter.annotation is inspect.Parameter.empty:
            kinds.append(ArgumentKind.STRING)
            continue

        try:
            annotation = _resolve_annotation(parameter.annotation, namespace)
        except Exception as e:
            raise StepDefinitionError(f'unable to resolve annotation "{parameter.annotation}" of parameter "{parameter.name}" in step handler {name}') from e

        try:
            kind = ANNOTATION_KINDS[annotation]
        except (KeyError, TypeError):
            raise StepDefinitionError(f'type {annotation!r} of parameter "{parameter.name}" in step handler {name} is not supported')

        kinds.append(kind)

    return kinds


def parse_bool(value: str) -> bool:
    try:
        return BOOL_LITERALS[value]
    except KeyError:
        raise ArgumentError('invalid boolean', value=value)


def parse_integer(value: str, bits: int) -> int:
    if PATTERN_INTEGER.match(value) is None:
        raise ArgumentError(f'invalid int{bits}', value=value)

    number = int(value, 10)
    limit = 1 << (bits - 1)

    if not -limit <= number < limit:
        raise ArgumentError(f'value out of range for int{bits}', value=value)

    return number


def parse_float(value: str, bits: int) -> float:
    if value != value.strip() or '_' in value:
        raise ArgumentError(f'invalid float{bits}', value=value)

    try:
        number = float(value)
    except ValueError:
        raise ArgumentError(f'invalid float{bits}', value=value)

    if math.isinf(number) and 'inf' not in value.lower():
        raise ArgumentError(f'value out of range for float{bits}', value=value)

    if bits == 32:
        try:
            number = struct.unpack('f', struct.pack('f', number))[0]
        except OverflowError:
            number = math.inf

        # finite literals beyond single precision round to infinity
        if math.isinf(number) and 'inf' not in value.lower():
            raise ArgumentError('value out of range for float32', value=value)

    return number


def coerce(kind: ArgumentKind, value: str) -> Any:
    if kind == ArgumentKind.BOOL:
        return parse_bool(value)
    elif kind in INTEGER_BITS:
        return parse_integer(value, INTEGER_BITS[kind])
    elif kind == ArgumentKind.FLOAT32:
        return parse_float(value, 32)
    elif kind == ArgumentKind.FLOAT64:
        return parse_float(value, 64)
    elif kind == ArgumentKind.STRING:
        return value

    raise StepDefinitionError(f'argument kind {kind!r} is not supported')


def coerce_arguments(kinds: Sequence[ArgumentKind], captures: Sequence[str]) -> Tuple[Any, ...]:
    """Convert capture groups 1..n to the kinds declared by the handler,
    group 0 is the whole match and is not passed on.
    """
    if len(kinds) != len(captures) - 1:
        raise StepDefinitionError(f'step handler declares {len(kinds)} arguments, but pattern captured {len(captures) - 1} groups')

    arguments = tuple(coerce(kind, capture) for kind, capture in zip(kinds, captures[1:]))

    logger.debug(f'coerced {list(captures[1:])} to {arguments}')

    return arguments
