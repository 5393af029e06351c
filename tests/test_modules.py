import pytest
from clarice.builtin_function import BuiltinFunction
from clarice.errors import ClariceError
from clarice.interpreter import Interpreter, parse_program, run_program
from clarice.modules import ModuleObject, ModuleRegistry, default_registry
from clarice.std.extra import to_html


def run(source, capsys, **kwargs):
    run_program(source, **kwargs)
    return capsys.readouterr().out


def run_error(source):
    with pytest.raises(ClariceError) as excinfo:
        run_program(source)
    return excinfo.value


def test_register_and_resolve():
    registry = ModuleRegistry()
    tools = ModuleObject('Tools')
    registry.register('Host/Lib/Tools', tools)
    assert registry.resolve('Host/Lib/Tools') is tools
    assert registry.resolve(['Host', 'Lib', 'Tools']) is tools
    assert isinstance(registry.resolve('Host/Lib'), ModuleObject)


def test_resolve_missing_module():
    with pytest.raises(ClariceError) as excinfo:
        default_registry().resolve('Clarice/Extra/Nope')
    assert excinfo.value.name == 'ModuleNotFoundError'
    assert 'Clarice/Extra/Nope' in str(excinfo.value)


def test_frozen_registry_rejects_registration():
    registry = ModuleRegistry().freeze()
    with pytest.raises(RuntimeError):
        registry.register('A/B', ModuleObject('B'))


def test_cannot_register_below_a_function():
    registry = ModuleRegistry()
    registry.register('A/f', BuiltinFunction('f', 0, lambda args: None))
    with pytest.raises(ValueError):
        registry.register('A/f/g', ModuleObject('g'))


def test_host_module(capsys):
    registry = default_registry()
    registry.register('Host/Tools', ModuleObject('Tools', {
        'Double': BuiltinFunction('Double', 1, lambda args: args[0] * 2),
        'Pair': BuiltinFunction('Pair', 0, lambda args: [1, 2]),
        'Nothing': BuiltinFunction('Nothing', 0, lambda args: None),
    }))
    source = 'using Tools from Host\nprint Tools.Double(21)\nprint Tools.Pair()\nprint Tools.Nothing()'
    assert run(source, capsys, registry=registry) == '42\n[1, 2]\nnull\n'


def test_markdown_to_html():
    assert to_html('**bold**') == '<p><strong>bold</strong></p>'


def test_markdown_to_html_from_a_script(capsys):
    assert run('using Markdown from Clarice/Extra\nprint Markdown.ToHTML("# Title")', capsys) == '<h1>Title</h1>\n'


def test_markdown_convert_html_writes_a_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    source = ('using Markdown from Clarice/Extra\n'
              'with Markdown.ConvertHTML as convert do convert("# Title", "out.html") and print "ok"')
    assert run(source, capsys) == 'ok\n'
    assert '<h1>Title</h1>' in (tmp_path / 'out.html').read_text(encoding='utf-8')


def test_markdown_convert_html_needs_strings():
    err = run_error('using Markdown from Clarice/Extra\nMarkdown.ConvertHTML(1, "out.html")')
    assert err.name == 'RuntimeTypeError'


def test_text_module(capsys):
    source = '\n'.join([
        'using Text from Clarice/Core',
        'print Text.Upper("abc") .. Text.Lower("DEF")',
        'print Text.Trim("  hi  ")',
        'print Text.Length("four")',
        'print Text.Split("a,b,c", ",")',
        'print Text.Join(["x", "y"], "-")',
        'print Text.Number("3") + Text.Number("2.5")',
    ])
    assert run(source, capsys) == 'ABCdef\nhi\n4\n["a", "b", "c"]\nx-y\n5.5\n'


def test_text_errors():
    assert run_error('using Text from Clarice/Core\nprint Text.Number("x")').name == 'ValueError'
    assert run_error('using Text from Clarice/Core\nprint Text.Split("a", "")').name == 'ValueError'
    assert run_error('using Text from Clarice/Core\nprint Text.Upper(1)').name == 'RuntimeTypeError'
    assert run_error('using Text from Clarice/Core\nprint Text.Join([1], ",")').name == 'RuntimeTypeError'


def test_list_module(capsys):
    source = '\n'.join([
        'using List from Clarice/Core',
        'with xs as List.Range(3) print xs and print List.Length(xs) and print List.Get(xs, 2)',
        'print List.Range(2, 4)',
        'print List.Append([1], "two")',
    ])
    assert run(source, capsys) == '[0, 1, 2]\n3\n2\n[2, 3]\n[1, "two"]\n'


def test_list_errors():
    assert run_error('using List from Clarice/Core\nprint List.Get([1], 5)').name == 'IndexError'
    assert run_error('using List from Clarice/Core\nprint List.Range()').name == 'RuntimeTypeError'
    assert run_error('using List from Clarice/Core\nprint List.Length("abc")').name == 'RuntimeTypeError'


def test_file_module(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    source = '\n'.join([
        'using File from Clarice/Core',
        'File.Write("notes.txt", "one")',
        'File.Append("notes.txt", " two")',
        'print File.Exists("notes.txt")',
        'print File.Read("notes.txt")',
        'File.Delete("notes.txt")',
        'print File.Exists("notes.txt")',
    ])
    assert run(source, capsys) == 'true\none two\nfalse\n'
    assert not (tmp_path / 'notes.txt').exists()


def test_reading_a_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run_error('using File from Clarice/Core\nprint File.Read("missing.txt")').name == 'IOError'
    assert run_error('using File from Clarice/Core\nFile.Delete("missing.txt")').name == 'IOError'


def test_interpreter_freezes_its_registry():
    registry = ModuleRegistry()
    Interpreter(registry=registry)
    assert registry.frozen
    with pytest.raises(RuntimeError):
        registry.register('Late/Module', ModuleObject('Module'))


def test_reading_a_file_that_is_not_utf8(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / 'bad.txt').write_bytes(b'\xff\xfe\xfa')
    err = run_error('using File from Clarice/Core\nprint File.Read("bad.txt")')
    assert err.name == 'IOError'
    assert 'bad.txt' in str(err)
