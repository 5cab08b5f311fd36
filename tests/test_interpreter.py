from logille.errors import ExecutionError, ParseError
from logille.interpreter import Interpreter, Scope
from logille.turtle import DrawingSurface, project_endpoint
from logille.syntax import f32
from pytest import approx
import pytest

class Recorder(DrawingSurface):
    """Recorder remembers every segment instead of drawing it"""
    def __init__(self): self.segments = []

    def draw_segment(self, x, y, direction, length, color):
        self.segments.append((x, y, direction, length, color.name))
        return project_endpoint(x, y, direction, length)

def script(*lines): return '\n'.join(lines)

def run(text, **kwargs):
    kwargs.setdefault('width', 100)
    kwargs.setdefault('height', 100)
    surface = Recorder()
    logo = Interpreter(surface, **kwargs)
    logo.run(text)
    return logo, surface

def fail(text, **kwargs):
    surface = Recorder()
    logo = Interpreter(surface, **kwargs)
    with pytest.raises(ExecutionError) as err: logo.run(text)
    return err.value, logo, surface

def test_initial_state():
    logo, surface = run('')
    t = logo.turtle
    assert (t.x, t.y, t.heading, t.color, t.pen_down) == (50.0, 50.0, 0, 7, False)
    assert surface.segments == []

def test_scope():
    scope = Scope('test', {'A': 1.0})
    scope.set('B', True)
    assert scope.get('A') == 1.0 and scope.get('B') is True
    assert 'B' in scope and 'C' not in scope
    with pytest.raises(ExecutionError) as err: scope.get('C')
    assert 'variable not defined' in str(err.value)

def test_pen_up_moves_are_projected():
    logo, surface = run(script('FORWARD "10', 'RIGHT "5', 'BACK "3', 'LEFT "2'))
    assert surface.segments == []
    assert logo.turtle.x == approx(53.0, abs=1e-4)
    assert logo.turtle.y == approx(43.0, abs=1e-4)
    assert logo.turtle.heading == 0

def test_pen_down_moves_draw():
    logo, surface = run(script('PENDOWN', 'TURN "45', 'BACK "2', 'PENUP', 'FORWARD "1'))
    assert surface.segments == [(50.0, 50.0, 225, 2.0, 'white')]
    assert logo.turtle.heading == 45

def test_while_counter_loop():
    logo, surface = run(script(
        'MAKE "X "0',
        'PENDOWN',
        'WHILE LT :X "3 [',
        '    FORWARD "10',
        '    MAKE "X + :X "1',
        ']',
    ))
    assert [s[3] for s in surface.segments] == [10.0, 10.0, 10.0]
    assert logo.globals.get('X') == 3.0
    assert logo.turtle.y == approx(20.0)

def test_while_initially_false():
    logo, surface = run(script('PENDOWN', 'WHILE "FALSE [', 'FORWARD "10', ']'))
    assert surface.segments == []

def test_if_false_has_no_effect():
    logo, surface = run(script(
        'IF EQ "1 "2 [',
        '    PENDOWN',
        '    FORWARD "10',
        '    MAKE "Y "1',
        '    TURN "90',
        ']',
    ))
    assert surface.segments == []
    assert 'Y' not in logo.globals
    t = logo.turtle
    assert (t.x, t.y, t.heading, t.pen_down) == (50.0, 50.0, 0, False)

def test_if_true_runs_body_in_same_scope():
    logo, _ = run(script('MAKE "A "1', 'IF EQ :A "1 [', 'MAKE "B "2', ']'))
    assert logo.globals.get('B') == 2.0

def test_operator_order():
    logo, _ = run(script('MAKE "D - "4 "2', 'MAKE "Q / "8 "2', 'MAKE "G GT "4 "2'))
    assert logo.globals.get('D') == 2.0
    assert logo.globals.get('Q') == 4.0
    assert logo.globals.get('G') is True

def test_equality():
    logo, _ = run(script(
        'MAKE "A EQ + "0.1 "0.2 "0.3',
        'MAKE "B NE "TRUE "FALSE',
        'MAKE "C EQ "TRUE "TRUE',
        'MAKE "D NE "1 "1.5',
        'MAKE "E OR "FALSE AND "TRUE "FALSE',
    ))
    values = [logo.globals.get(name) for name in 'ABCDE']
    assert values == [True, True, True, True, False]

def test_queries():
    logo, _ = run(script(
        'SETX "10', 'SETY "20', 'SETHEADING "-90', 'SETPENCOLOR "2',
        'MAKE "P + XCOR YCOR', 'MAKE "H HEADING', 'MAKE "C COLOR',
    ))
    assert logo.globals.get('P') == 30.0
    assert logo.globals.get('H') == -90.0
    assert logo.globals.get('C') == 2.0

def test_heading_is_not_normalized():
    logo, _ = run(script('TURN "300', 'TURN "300'))
    assert logo.turtle.heading == 600

def test_pen_color():
    logo, surface = run(script('SETPENCOLOR "4', 'PENDOWN', 'FORWARD "1'))
    assert surface.segments[0][4] == 'red'

@pytest.mark.parametrize('line, message', [
    ('SETPENCOLOR "16',  'not in the palette'),
    ('SETPENCOLOR "1.5', 'whole number'),
    ('TURN "1.5',        'whole number'),
    ('SETHEADING "TRUE', 'expected a number'),
    ('FORWARD "TRUE',    'expected a number'),
    ('IF "1 [\n]',       'expected a boolean'),
    ('MAKE "A EQ "TRUE "1', 'cannot compare'),
    ('MAKE "A AND "TRUE "1', 'expected a boolean'),
    ('MAKE "A AND "FALSE "1', 'expected a boolean'),
    ('MAKE "A OR "TRUE "1', 'expected a boolean'),
    ('MAKE "A OR "1 "FALSE', 'expected a boolean'),
    ('MAKE "A LT "TRUE "1', 'expected a number'),
    ('FORWARD :NOPE',    'variable not defined'),
    ('ADDASSIGN "NOPE "1', 'variable not defined'),
])
def test_runtime_errors(line, message):
    err, _, _ = fail(line)
    assert message in str(err)
    assert err.lineno == 1

def test_division_by_zero_changes_nothing():
    err, logo, surface = fail(script('PENDOWN', 'FORWARD / "10 "0'))
    assert 'division by zero' in str(err)
    assert err.lineno == 2
    assert surface.segments == []
    assert (logo.turtle.x, logo.turtle.y) == (50.0, 50.0)

    err, logo, _ = fail(script('MAKE "X "1', 'MAKE "X / :X - "1 "1'))
    assert logo.globals.get('X') == 1.0

def test_numbers_out_of_range():
    err, logo, surface = fail(script('PENDOWN', 'FORWARD * "1e30 "1e30'))
    assert 'number out of range' in str(err)
    assert err.lineno == 2
    assert surface.segments == []
    assert (logo.turtle.x, logo.turtle.y) == (50.0, 50.0)

    err, logo, surface = fail(script('SETX "3e38', 'PENDOWN', 'RIGHT "3e38'))
    assert 'number out of range' in str(err)
    assert surface.segments == []
    assert logo.turtle.x == f32(3e38)

    err, logo, _ = fail(script('MAKE "X "3e38', 'ADDASSIGN "X :X'))
    assert err.lineno == 2
    assert logo.globals.get('X') == f32(3e38)

    err, _, _ = fail('MAKE "Y / "3e38 "1e-30')
    assert 'number out of range' in str(err)

def test_and_or():
    logo, _ = run(script(
        'MAKE "A AND "TRUE "FALSE',
        'MAKE "B OR "FALSE "TRUE',
        'MAKE "C AND "TRUE "TRUE',
        'MAKE "D OR "FALSE "FALSE',
    ))
    assert [logo.globals.get(name) for name in 'ABCD'] == [False, True, True, False]

def test_procedure_scope_isolation():
    logo, _ = run(script(
        'MAKE "LEN "5',
        'TO SET "LEN',
        '    MAKE "INNER "1',
        '    MAKE "LEN "99',
        'END',
        'SET "7',
    ))
    assert logo.globals.get('LEN') == 5.0
    assert 'INNER' not in logo.globals

def test_procedure_cannot_see_globals():
    err, _, _ = fail(script('MAKE "G "1', 'TO PEEK', '    MAKE "Y :G', 'END', 'PEEK'))
    assert 'variable not defined' in str(err)
    assert err.lineno == 3

def test_arguments_are_evaluated_in_caller_scope():
    logo, _ = run(script(
        'MAKE "X "3',
        'MAKE "OUT "0',
        'TO SHOW "V',
        '    ADDASSIGN "OUT :V',
        'END',
        'SHOW :X',
        'SHOW "2',
    ))
    assert logo.globals.get('OUT') == 5.0

def test_add_assign_targets_globals_inside_procedures():
    logo, _ = run(script(
        'MAKE "TOTAL "1',
        'TO BUMP "N',
        '    ADDASSIGN "TOTAL :N',
        'END',
        'BUMP "4',
    ))
    assert logo.globals.get('TOTAL') == 5.0

def test_add_assign_ignores_procedure_locals():
    err, logo, _ = fail(script('TO LOCAL "N', '    ADDASSIGN "N "1', 'END', 'LOCAL "4'))
    assert 'variable not defined' in str(err)
    assert err.lineno == 2
    assert 'N' not in logo.globals

def test_recursive_procedure():
    logo, surface = run(script(
        'TO SPIRAL "N',
        '    IF GT :N "0 [',
        '        FORWARD :N',
        '        TURN "90',
        '        MAKE "M - :N "1',
        '        SPIRAL :M',
        '    ]',
        'END',
        'PENDOWN',
        'SPIRAL "4',
    ))
    assert [(s[2], s[3]) for s in surface.segments] == [(0, 4.0), (90, 3.0), (180, 2.0), (270, 1.0)]
    assert logo.turtle.heading == 360

DOWN = script(
    'TO DOWN "N',
    '    IF GT :N "0 [',
    '        MAKE "M - :N "1',
    '        DOWN :M',
    '    ]',
    'END',
)

def test_deep_recursion_does_not_use_the_python_stack():
    logo, _ = run(DOWN + '\nMAKE "DONE "TRUE\nDOWN "3000')
    assert logo.globals.get('DONE') is True

def test_max_depth():
    err, _, _ = fail(DOWN + '\nDOWN "100', max_depth=50)
    assert 'maximum recursion depth' in str(err)

def test_call_arity_is_checked_at_runtime():
    err, _, _ = fail(script('TO P "A', 'END', 'P "1', 'TO P', 'END'))
    assert 'expects 0 arguments' in str(err)
    assert err.lineno == 3

def test_runs_share_procedures_and_globals():
    surface = Recorder()
    logo = Interpreter(surface, 100, 100)
    logo.run(script('TO STEP', '    FORWARD "1', 'END', 'MAKE "A "1'))
    logo.run(script('PENDOWN', 'STEP', 'ADDASSIGN "A "1'))
    assert len(surface.segments) == 1
    assert logo.globals.get('A') == 2.0

def test_failed_parse_keeps_procedures():
    logo, _ = run(script('TO A', '    FORWARD "1', 'END'))
    with pytest.raises(ParseError): logo.run(script('TO B', '    FORWARD', 'END'))
    assert list(logo.procedures) == ['A']

def test_reset_and_run_again():
    text = script('PENDOWN', 'MAKE "A "1', 'TURN "90', 'FORWARD "5')
    logo, surface = run(text)
    first = (logo.turtle.x, logo.turtle.y, logo.turtle.heading)
    logo.reset()
    assert 'A' not in logo.globals
    logo.run(text)
    assert (logo.turtle.x, logo.turtle.y, logo.turtle.heading) == first
    assert surface.segments[0] == surface.segments[1]
