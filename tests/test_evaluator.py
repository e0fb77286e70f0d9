'''
Evaluator tests, through the engine
'''

from pytest import mark

from stepcalc.engine import Engine
from stepcalc.nodes import Arena, BinaryNode, FunctionNode, FactorialNode
from stepcalc.policy import ArithmeticType, Unit
from stepcalc.steps import StepKind, MAX_STEPS


def value_of(engine, text):
    result, ok = engine.evaluate(text)
    assert ok
    return result


@mark.parametrize('text, expected, operations', [
    ('2+3*4', '14', ['Multiply 3 by 4', 'Add 2 and 12']),
    ('2^3^2', '512', ['Raise 3 to power 2', 'Raise 2 to power 9']),
    ('-2^2', '-4', ['Raise 2 to power 2', 'Subtract 4 from 0']),
    ('sin(0)+cos(0)', '1', ['Calculate sin of 0', 'Calculate cos of 0',
                            'Add 0 and 1']),
    ('5!', '120', ['Calculate factorial of 5']),
    ('(1+2)*3', '9', ['Add 1 and 2', 'Multiply 3 by 3']),
    ('log(100)+ln(1)', '2', ['Calculate log of 100', 'Calculate ln of 1',
                             'Add 2 and 0']),
    ('sqrt(16)/2', '2', ['Calculate sqrt of 16', 'Divide 4 by 2']),
    ('', '0', []),
])
def test_scenarios(engine, text, expected, operations):
    result = value_of(engine, text)
    assert result.formatted_text == expected
    assert [step.operation for step in result.steps] == operations


def test_binary_step_fields(engine):
    step = value_of(engine, '2+3').steps[0]
    assert step.kind is StepKind.BINARY
    assert step.expression == '2 + 3'
    assert (step.left, step.right, step.result) == ('2', '3', '5')
    assert str(step) == '2 + 3 => Add 2 and 3 => 5'


def test_unary_step_fields(engine):
    steps = value_of(engine, 'sqrt(9)!').steps
    assert steps[0].kind is StepKind.UNARY_LEFT
    assert (steps[0].expression, steps[0].right) == ('sqrt(9)', '9')
    assert steps[1].kind is StepKind.UNARY_RIGHT
    assert (steps[1].expression, steps[1].left) == ('3!', '3')
    assert steps[1].result == '6'


def test_division_by_zero(engine):
    result = value_of(engine, '1/0')
    assert engine.reals.is_zero(result.value)
    assert result.step_count == 1
    step = result.steps[0]
    assert step.kind is StepKind.ERROR
    assert (step.expression, step.operation, step.result) == \
        ('Division by zero', 'Error', 'Undefined')


def test_division_by_zero_continues(engine):
    result = value_of(engine, '1/0+2')
    assert result.formatted_text == '2'
    assert [step.kind for step in result.steps] == [StepKind.ERROR,
                                                   StepKind.BINARY]


@mark.parametrize('text, expression', [
    ('sqrt(0-1)', 'sqrt domain error'),
    ('ln(0)', 'ln domain error'),
    ('log(0-5)', 'log domain error'),
    ('(0-3)!', 'Factorial domain error'),
    ('2.5!', 'Factorial domain error'),
    ('1001!', 'Factorial too large'),
])
def test_domain_errors(engine, text, expression):
    result = value_of(engine, text)
    assert engine.reals.is_zero(result.value)
    assert result.steps[-1].kind is StepKind.ERROR
    assert result.steps[-1].expression == expression
    assert result.errors == [result.steps[-1]]


def test_sqrt_of_negative(engine):
    result = value_of(engine, 'sqrt(-1)')
    assert result.formatted_text == '0'
    assert result.steps[-1].expression == 'sqrt domain error'


def test_sqrt_of_zero_is_fine(engine):
    result = value_of(engine, 'sqrt(0)')
    assert result.errors == []


def test_factorial_of_zero(engine):
    assert value_of(engine, '0!').formatted_text == '1'


def test_variables(engine):
    engine.set_variable('x', 5)
    result = value_of(engine, 'X*2')
    assert result.formatted_text == '10'
    step = result.steps[0]
    assert step.kind is StepKind.SUBSTITUTE
    assert (step.expression, step.operation, step.result) == \
        ('x', 'Substitute x', '5')


def test_undefined_variable(engine):
    result = value_of(engine, 'y+1')
    assert result.formatted_text == '1'
    step = result.steps[0]
    assert step.kind is StepKind.ERROR
    assert (step.operation, step.result) == ('Substitute y', '0')
    assert result.step_count == 2


def test_e_is_substituted(engine):
    result = value_of(engine, 'E')
    assert result.value == engine.reals.e
    assert result.steps[0].kind is StepKind.SUBSTITUTE


def test_pi_is_a_number(engine):
    result = value_of(engine, 'PI')
    assert result.value == engine.reals.pi
    assert result.steps == []


def test_with_and_without_steps_agree(engine):
    engine.set_variable('x', '0.7')
    engine.set_arithmetic_mode(ArithmeticType.ROUND, 3,
                               Unit.SIGNIFICANT_DIGITS)
    for text in ['2+3*4', '1/3+x^2', 'sin(x)*cos(x)/tan(1)', '7!/3',
                 'ln(x)-log(2)', '1/0', 'y*2']:
        root = engine.parse(text)
        plain = engine.evaluator.evaluate(root)
        result, ok = engine.evaluate(text)
        assert result.value == plain
        assert engine.evaluator.evaluate(root) == plain


def test_post_order():
    engine = Engine()
    root = engine.parse('sqrt(4)*(3!-1)')
    order = []

    def visit(index):
        for child in engine.arena.children(index):
            visit(child)
        node = engine.arena[index]
        if isinstance(node, (BinaryNode, FunctionNode, FactorialNode)):
            order.append(index)

    visit(root)
    result, _ = engine.evaluate('sqrt(4)*(3!-1)')
    assert len(order) == result.step_count == 4
    assert [step.operation for step in result.steps] == [
        'Calculate sqrt of 4', 'Calculate factorial of 3',
        'Subtract 1 from 6', 'Multiply 2 by 5']


def test_step_buffer_overflow(engine):
    text = '+'.join(['1'] * (MAX_STEPS + 2))
    result = value_of(engine, text)
    assert result.formatted_text == str(MAX_STEPS + 2)
    assert result.step_count == MAX_STEPS
    assert result.steps[-1].result == str(MAX_STEPS + 1)


def test_round_places_policy(engine):
    engine.set_arithmetic_mode(ArithmeticType.ROUND, 2, Unit.DECIMAL_PLACES)
    result = value_of(engine, '1/3')
    assert result.formatted_text == '0.33'
    assert result.steps[0].expression == '1.00 / 3.00'


def test_truncate_places_policy(engine):
    engine.set_arithmetic_mode(ArithmeticType.TRUNCATE, 2,
                               Unit.DECIMAL_PLACES)
    assert value_of(engine, '2/3').formatted_text == '0.66'
    assert value_of(engine, '1/3').formatted_text == '0.33'


def test_round_significant_policy(engine):
    engine.set_arithmetic_mode(ArithmeticType.ROUND, 3,
                               Unit.SIGNIFICANT_DIGITS)
    assert value_of(engine, '1/3000').formatted_text == '0.000333'


def test_policy_applies_to_operands(engine):
    engine.set_arithmetic_mode(ArithmeticType.ROUND, 1, Unit.DECIMAL_PLACES)
    result = value_of(engine, '0.04/0.04')
    # Both operands round to zero before dividing.
    assert result.steps[0].expression == 'Division by zero'


def test_policy_snapshot_is_kept(engine):
    engine.set_arithmetic_mode(ArithmeticType.TRUNCATE, 3)
    result = value_of(engine, '1')
    engine.set_arithmetic_mode(ArithmeticType.NORMAL)
    assert result.policy_snapshot.mode is ArithmeticType.TRUNCATE
    assert result.policy_snapshot.precision == 3


def test_arena_unused_after_evaluate():
    engine = Engine(nodes=3)
    result, ok = engine.evaluate('1+2+3')
    assert not ok
    assert result.formatted_text == '0'
    assert result.steps == []
    assert isinstance(engine.arena, Arena)
