"""The `Clarice/Core` Text and List modules."""

from typing import Any, List

from clarice.builtin_function import BuiltinFunction
from clarice.errors import ClariceError, type_error
from clarice.modules import ModuleObject
from clarice.types import ErrorVal, ListVal, check_kind, type_name, STRING_KIND, LIST_KIND, INT_KIND


def _expect(fn_name: str, value: Any, kind: str) -> None:
    try:
        check_kind(value, kind)
    except TypeError as e:
        raise type_error(f'{fn_name}: {e}')


def populate_text_module() -> ModuleObject:
    module = ModuleObject('Text')

    def text_upper(args: List[Any]) -> Any:
        _expect('Text.Upper', args[0], STRING_KIND)
        return args[0].upper()

    def text_lower(args: List[Any]) -> Any:
        _expect('Text.Lower', args[0], STRING_KIND)
        return args[0].lower()

    def text_trim(args: List[Any]) -> Any:
        _expect('Text.Trim', args[0], STRING_KIND)
        return args[0].strip()

    def text_length(args: List[Any]) -> Any:
        _expect('Text.Length', args[0], STRING_KIND)
        return len(args[0])

    def text_split(args: List[Any]) -> Any:
        text, sep = args
        _expect('Text.Split', text, STRING_KIND)
        _expect('Text.Split', sep, STRING_KIND)
        if sep == '':
            raise ClariceError(ErrorVal('ValueError', 'Text.Split separator must not be empty'))
        return ListVal(text.split(sep))

    def text_join(args: List[Any]) -> Any:
        items, sep = args
        _expect('Text.Join', items, LIST_KIND)
        _expect('Text.Join', sep, STRING_KIND)
        for item in items.items:
            if not isinstance(item, str):
                raise type_error(f'Text.Join: expected a list of String, found {type_name(item)}')
        return sep.join(items.items)

    def text_number(args: List[Any]) -> Any:
        text = args[0]
        _expect('Text.Number', text, STRING_KIND)
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise ClariceError(ErrorVal('ValueError', f'cannot parse number: {text!r}'))

    module.members['Upper'] = BuiltinFunction('Upper', 1, text_upper)
    module.members['Lower'] = BuiltinFunction('Lower', 1, text_lower)
    module.members['Trim'] = BuiltinFunction('Trim', 1, text_trim)
    module.members['Length'] = BuiltinFunction('Length', 1, text_length)
    module.members['Split'] = BuiltinFunction('Split', 2, text_split)
    module.members['Join'] = BuiltinFunction('Join', 2, text_join)
    module.members['Number'] = BuiltinFunction('Number', 1, text_number)
    return module


def populate_list_module() -> ModuleObject:
    module = ModuleObject('List')

    def list_length(args: List[Any]) -> Any:
        _expect('List.Length', args[0], LIST_KIND)
        return len(args[0].items)

    def list_get(args: List[Any]) -> Any:
        items, index = args
        _expect('List.Get', items, LIST_KIND)
        _expect('List.Get', index, INT_KIND)
        if index < 0 or index >= len(items.items):
            raise ClariceError(ErrorVal('IndexError', f'list index {index} out of range'))
        return items.items[index]

    def list_append(args: List[Any]) -> Any:
        items, value = args
        _expect('List.Append', items, LIST_KIND)
        return ListVal(items.items + [value])

    def list_range(args: List[Any]) -> Any:
        if len(args) == 1:
            start, stop = 0, args[0]
        elif len(args) == 2:
            start, stop = args
        else:
            raise type_error('List.Range expects 1 or 2 arguments')
        _expect('List.Range', start, INT_KIND)
        _expect('List.Range', stop, INT_KIND)
        return ListVal(list(range(start, stop)))

    module.members['Length'] = BuiltinFunction('Length', 1, list_length)
    module.members['Get'] = BuiltinFunction('Get', 2, list_get)
    module.members['Append'] = BuiltinFunction('Append', 2, list_append)
    module.members['Range'] = BuiltinFunction('Range', None, list_range)
    return module
