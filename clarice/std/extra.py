"""The `Clarice/Extra` modules.

`Markdown.ConvertHTML(text, path)` renders Markdown with the `markdown`
package and writes the HTML to `path`; `Markdown.ToHTML(text)` returns
the HTML instead.
"""

from typing import Any, List

import markdown

from clarice.builtin_function import BuiltinFunction
from clarice.errors import type_error
from clarice.modules import ModuleObject
from clarice.std.io import BasicIO


MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']


def to_html(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def populate_markdown_module(basic_io: BasicIO = None) -> ModuleObject:
    basic_io = basic_io or BasicIO()
    module = ModuleObject('Markdown')

    def md_convert_html(args: List[Any]) -> Any:
        text, path = args
        if not isinstance(text, str):
            raise type_error('Markdown.ConvertHTML text argument must be String')
        if not isinstance(path, str):
            raise type_error('Markdown.ConvertHTML path argument must be String')
        return basic_io.write_text(path, to_html(text))

    def md_to_html(args: List[Any]) -> Any:
        text = args[0]
        if not isinstance(text, str):
            raise type_error('Markdown.ToHTML text argument must be String')
        return to_html(text)

    module.members['ConvertHTML'] = BuiltinFunction('ConvertHTML', 2, md_convert_html)
    module.members['ToHTML'] = BuiltinFunction('ToHTML', 1, md_to_html)
    return module
