import functools

from typing import Any, List

import pytest

from gherkin_runner.arguments import (
    ArgumentKind,
    int8,
    int16,
    int32,
    int64,
    float32,
    float64,
    get_argument_kinds,
    coerce,
    coerce_arguments,
    parse_bool,
    parse_integer,
    parse_float,
)
from gherkin_runner.exceptions import ArgumentError, FatalError, StepDefinitionError
from gherkin_runner.world import World


def test_get_argument_kinds() -> None:
    def no_arguments(world: World) -> None:
        pass

    def all_arguments(world: World, b: bool, i8: int8, i16: int16, i32: int32, i64: int64, i: int, f32: float32, f64: float64, f: float, s: str) -> None:
        pass

    def not_annotated(world, value):  # type: ignore
        pass

    assert get_argument_kinds(no_arguments) == []
    assert get_argument_kinds(all_arguments) == [
        ArgumentKind.BOOL,
        ArgumentKind.INT8,
        ArgumentKind.INT16,
        ArgumentKind.INT32,
        ArgumentKind.INT64,
        ArgumentKind.INT64,
        ArgumentKind.FLOAT32,
        ArgumentKind.FLOAT64,
        ArgumentKind.FLOAT64,
        ArgumentKind.STRING,
    ]
    assert get_argument_kinds(not_annotated) == [ArgumentKind.STRING]
    assert get_argument_kinds(lambda world, a, b: None) == [ArgumentKind.STRING, ArgumentKind.STRING]


def test_get_argument_kinds_unsupported() -> None:
    def unsupported(world: World, value: List[str]) -> None:
        pass

    def any_value(world: World, value: Any) -> None:
        pass

    def var_positional(world: World, *values: str) -> None:
        pass

    def keyword_only(world: World, *, value: str) -> None:
        pass

    def no_world() -> None:
        pass

    with pytest.raises(StepDefinitionError, match='is not supported'):
        get_argument_kinds(unsupported)

    with pytest.raises(StepDefinitionError, match='is not supported'):
        get_argument_kinds(any_value)

    with pytest.raises(StepDefinitionError, match='can only have positional parameters'):
        get_argument_kinds(var_positional)

    with pytest.raises(StepDefinitionError, match='can only have positional parameters'):
        get_argument_kinds(keyword_only)

    with pytest.raises(StepDefinitionError, match='must accept the world as first parameter'):
        get_argument_kinds(no_world)


def test_get_argument_kinds_postponed() -> None:
    def postponed(world: 'World', count: 'int32', ratio: 'float32', name: 'str') -> None:
        pass

    def unknown(world: World, value: 'Unknown') -> None:  # type: ignore  # noqa: F821
        pass

    assert get_argument_kinds(postponed) == [ArgumentKind.INT32, ArgumentKind.FLOAT32, ArgumentKind.STRING]

    with pytest.raises(StepDefinitionError, match='unable to resolve annotation "Unknown" of parameter "value" in step handler unknown'):
        get_argument_kinds(unknown)


def test_get_argument_kinds_callables() -> None:
    class Adder:
        def __call__(self, world: World, count: int32) -> None:
            pass

    class Unsupported:
        def __call__(self, world: World, value: List[str]) -> None:
            pass

    def add(total: int, world: World, count: int8) -> None:
        pass

    assert get_argument_kinds(Adder()) == [ArgumentKind.INT32]
    assert get_argument_kinds(Adder().__call__) == [ArgumentKind.INT32]
    assert get_argument_kinds(functools.partial(add, 10)) == [ArgumentKind.INT8]

    with pytest.raises(StepDefinitionError, match='in step handler <.*Unsupported object at .*> is not supported'):
        get_argument_kinds(Unsupported())

    with pytest.raises(StepDefinitionError, match=r'step handler functools\.partial\(.*\) must accept the world as first parameter'):
        get_argument_kinds(functools.partial(add, 10, World(['.']), 1))


def test_parse_bool() -> None:
    for value in ['1', 't', 'T', 'TRUE', 'true', 'True']:
        assert parse_bool(value) is True

    for value in ['0', 'f', 'F', 'FALSE', 'false', 'False']:
        assert parse_bool(value) is False

    for value in ['yes', 'tRuE', '', ' true', '2']:
        with pytest.raises(ArgumentError, match='invalid boolean'):
            parse_bool(value)


def test_parse_integer() -> None:
    assert parse_integer('127', 8) == 127
    assert parse_integer('-128', 8) == -128
    assert parse_integer('+12', 8) == 12
    assert parse_integer('255', 16) == 255
    assert parse_integer('-32768', 16) == -32768
    assert parse_integer('2147483647', 32) == 2147483647
    assert parse_integer('9223372036854775807', 64) == 9223372036854775807
    assert parse_integer('007', 32) == 7

    with pytest.raises(ArgumentError, match='value out of range for int8'):
        parse_integer('128', 8)

    with pytest.raises(ArgumentError, match='value out of range for int8'):
        parse_integer('-129', 8)

    with pytest.raises(ArgumentError, match='value out of range for int32'):
        parse_integer('2147483648', 32)

    with pytest.raises(ArgumentError, match='value out of range for int64'):
        parse_integer('9223372036854775808', 64)

    for value in ['x', '', '1.0', ' 1', '1_000', '0x10', '--1']:
        with pytest.raises(ArgumentError, match='invalid int32'):
            parse_integer(value, 32)


def test_parse_float() -> None:
    assert parse_float('0.4', 64) == 0.4
    assert parse_float('.5', 64) == 0.5
    assert parse_float('-1e3', 64) == -1000.0
    assert parse_float('42', 64) == 42.0
    assert parse_float('inf', 64) == float('inf')

    value = parse_float('0.3', 32)
    assert value != 0.3
    assert value == pytest.approx(0.3)

    with pytest.raises(ArgumentError, match='value out of range for float32'):
        parse_float('1e39', 32)

    for value in ['-1e39', '3.5e38']:
        with pytest.raises(ArgumentError, match='value out of range for float32'):
            parse_float(value, 32)

    assert parse_float('-inf', 32) == float('-inf')
    assert parse_float('3.4e38', 32) == pytest.approx(3.4e38, rel=1e-6)

    with pytest.raises(ArgumentError, match='value out of range for float64'):
        parse_float('1e400', 64)

    for value in ['x', '', ' 1.0', '1_0.0', '1,0']:
        with pytest.raises(ArgumentError, match='invalid float64'):
            parse_float(value, 64)


def test_coerce() -> None:
    assert coerce(ArgumentKind.BOOL, 'true') is True
    assert coerce(ArgumentKind.INT8, '127') == 127
    assert coerce(ArgumentKind.INT16, '255') == 255
    assert coerce(ArgumentKind.INT32, '-1') == -1
    assert coerce(ArgumentKind.INT64, '255') == 255
    assert coerce(ArgumentKind.FLOAT32, '0.5') == 0.5
    assert coerce(ArgumentKind.FLOAT64, '0.4') == 0.4
    assert coerce(ArgumentKind.STRING, ' as is ') == ' as is '

    with pytest.raises(StepDefinitionError, match='is not supported'):
        coerce('string', 'foo')  # type: ignore


def test_coerce_arguments() -> None:
    assert coerce_arguments([ArgumentKind.BOOL, ArgumentKind.INT32], ['true,42', 'true', '42']) == (True, 42)
    assert coerce_arguments([], ['whole match']) == ()

    with pytest.raises(StepDefinitionError, match='declares 2 arguments, but pattern captured 1 groups'):
        coerce_arguments([ArgumentKind.BOOL, ArgumentKind.INT32], ['true', 'true'])

    with pytest.raises(StepDefinitionError, match='declares 0 arguments, but pattern captured 1 groups'):
        coerce_arguments([], ['thing', 'thing'])

    with pytest.raises(ArgumentError) as ae:
        coerce_arguments([ArgumentKind.INT64], ['x', 'x'])

    assert ae.value.value == 'x'
    assert isinstance(ae.value, FatalError)
