import builtins
from pathlib import Path

from clarice.interpreter import run_file


EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def run_example(name, capsys):
    run_file(str(EXAMPLES / name))
    return capsys.readouterr().out


def test_winner(capsys):
    assert run_example('winner.clrs', capsys) == 'Winner!\n'


def test_declare(capsys):
    assert run_example('declare.clrs', capsys) == '3\n'


def test_countdown(capsys):
    assert run_example('countdown.clrs', capsys) == '3\n...\n2\n...\n1\nLiftoff!\n'


def test_letters(capsys):
    assert run_example('letters.clrs', capsys) == (
        'C\nL\nA\n'
        'Hello, clarice!\n'
        'The name has 7 letters.\n'
    )


def test_readme(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert run_example('readme.clrs', capsys) == 'Wrote readme.html\n'
    html = (tmp_path / 'readme.html').read_text(encoding='utf-8')
    assert '<h1>Clarice</h1>' in html
    assert '<em>readable</em>' in html


def test_prompt_reads_from_console(monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'ignored')
    from clarice.interpreter import run_program
    run_program('prompt "Press Enter: " then print "go"')
    assert capsys.readouterr().out == 'Press Enter: go\n'
