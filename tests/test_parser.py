import pytest
from clarice.ast import (
    Program, With, WithAlias, Let, Set, If, Loop, Iter, Break, Print,
    Prompt, Using, Sequence, ExprStmt, Literal, Ident, BinaryOp, UnaryOp,
    ListLit, Call, Member, StringTemplate
)
from clarice.errors import ParseError
from clarice.parser import parse_program


def one(source):
    program = parse_program(source)
    assert len(program.body) == 1
    return program.body[0]


def test_winner_scenario():
    assert parse_program('with x as 6 if x = 6 then print "Winner!" else print "Try again!"') == Program([
        With('x', Literal(6, 'Int'), If(
            BinaryOp('=', Ident('x'), Literal(6, 'Int')),
            Print(Literal('Winner!', 'String')),
            Print(Literal('Try again!', 'String')),
        )),
    ])


def test_with_transient_form_accepts_do():
    assert one('with x as "indented!" do print x') == With('x', Literal('indented!', 'String'), Print(Ident('x')))


def test_with_alias_form_on_member():
    assert one('with Markdown.ConvertHTML as convert do convert("a", "b")') == WithAlias(
        Member(Ident('Markdown'), 'ConvertHTML'),
        'convert',
        ExprStmt(Call(Ident('convert'), [Literal('a', 'String'), Literal('b', 'String')])),
    )


def test_with_alias_form_on_plain_name():
    assert one('with greet as hello do hello()') == WithAlias(Ident('greet'), 'hello', ExprStmt(Call(Ident('hello'), [])))


def test_with_name_as_name_without_do_is_transient():
    assert one('with x as y print x') == With('x', Ident('y'), Print(Ident('x')))


def test_let_with_and_without_type_word():
    assert parse_program('let x as int\nlet y\nset y to 2').body == [
        Let('x', 'int'), Let('y', None), Set('y', Literal(2, 'Int')),
    ]


def test_using_path():
    assert one('using Markdown from Clarice/Extra') == Using('Markdown', ['Clarice', 'Extra'])


def test_loop_until_end():
    assert parse_program('loop do print 1 if true then break end print 2').body == [
        Loop([Print(Literal(1, 'Int')), If(Literal(True, 'Bool'), Break(), None)]),
        Print(Literal(2, 'Int')),
    ]


def test_loop_without_end_runs_to_end_of_input():
    assert one('loop do print 1 print 2') == Loop([Print(Literal(1, 'Int')), Print(Literal(2, 'Int'))])


def test_iter():
    assert one('iter c in "ab" do print c end') == Iter('c', Literal('ab', 'String'), [Print(Ident('c'))])


def test_and_sequences_statements():
    assert one('print 1 and print 2 and print 3') == Sequence([
        Print(Literal(1, 'Int')), Print(Literal(2, 'Int')), Print(Literal(3, 'Int')),
    ])


def test_and_inside_if_branch():
    assert one('if true then print 1 and print 2 else print 3') == If(
        Literal(True, 'Bool'),
        Sequence([Print(Literal(1, 'Int')), Print(Literal(2, 'Int'))]),
        Print(Literal(3, 'Int')),
    )


def test_and_extends_with_body():
    assert one('with x as 1 print x and print x') == With(
        'x', Literal(1, 'Int'), Sequence([Print(Ident('x')), Print(Ident('x'))]),
    )


def test_arithmetic_precedence():
    assert one('print 1 + 2 * 3') == Print(
        BinaryOp('+', Literal(1, 'Int'), BinaryOp('*', Literal(2, 'Int'), Literal(3, 'Int'))),
    )
    assert one('print (1 + 2) * -3') == Print(
        BinaryOp('*', BinaryOp('+', Literal(1, 'Int'), Literal(2, 'Int')), UnaryOp('-', Literal(3, 'Int'))),
    )


def test_concat_binds_looser_than_sum():
    assert one('print "a" .. 1 + 2') == Print(
        BinaryOp('..', Literal('a', 'String'), BinaryOp('+', Literal(1, 'Int'), Literal(2, 'Int'))),
    )


def test_string_template():
    assert one('print "Hi {name}, {m.x}!"') == Print(StringTemplate([
        'Hi ', Ident('name'), ', ', Member(Ident('m'), 'x'), '!',
    ]))


def test_escaped_brace_is_literal_text():
    assert one('print "\\{name} \\"q\\" a\\nb"') == Print(Literal('{name} "q" a\nb', 'String'))


def test_braces_without_a_name_are_text():
    assert one('print "{ not a name }"') == Print(Literal('{ not a name }', 'String'))


def test_literals():
    assert one('print [1, 2.5, "x", true, false, null]') == Print(ListLit([
        Literal(1, 'Int'), Literal(2.5, 'Float'), Literal('x', 'String'),
        Literal(True, 'Bool'), Literal(False, 'Bool'), Literal(None, 'Null'),
    ]))


def test_prompt():
    assert one('prompt "Press Enter" then print "go"') == Prompt('Press Enter', Print(Literal('go', 'String')))


def test_missing_to():
    with pytest.raises(ParseError) as excinfo:
        parse_program('set x 3')
    err = excinfo.value
    assert err.expected == "'to'"
    assert err.found == "INT '3'"
    assert (err.line, err.column) == (1, 7)


def test_missing_then():
    with pytest.raises(ParseError) as excinfo:
        parse_program('if x = 1 print x')
    assert excinfo.value.expected == "'then'"


def test_missing_expression_at_end():
    with pytest.raises(ParseError) as excinfo:
        parse_program('with x as')
    assert excinfo.value.expected == 'expression'
    assert excinfo.value.found is None


def test_stray_keyword_is_not_a_statement():
    with pytest.raises(ParseError) as excinfo:
        parse_program('print 1\nend')
    assert excinfo.value.expected == 'statement'
    assert excinfo.value.line == 2


def test_using_needs_a_path():
    with pytest.raises(ParseError) as excinfo:
        parse_program('using Markdown from')
    assert excinfo.value.expected == 'identifier'


def test_then_chains_like_and():
    assert parse_program('let x\nset x to "Hello!" then print x').body == [
        Let('x', None),
        Sequence([Set('x', Literal('Hello!', 'String')), Print(Ident('x'))]),
    ]


def test_then_after_if_condition_is_still_the_if():
    assert one('if true then print 1 then print 2 else print 3') == If(
        Literal(True, 'Bool'),
        Sequence([Print(Literal(1, 'Int')), Print(Literal(2, 'Int'))]),
        Print(Literal(3, 'Int')),
    )


def test_chain_ends_with_a_compound_statement():
    assert one('print 1 and with x as 2 print x and print x') == Sequence([
        Print(Literal(1, 'Int')),
        With('x', Literal(2, 'Int'), Sequence([Print(Ident('x')), Print(Ident('x'))])),
    ])


def test_long_chain_is_flat():
    stmt = one(' and '.join(['print 1'] * 2000))
    assert isinstance(stmt, Sequence)
    assert len(stmt.statements) == 2000
