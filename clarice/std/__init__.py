# Standard modules registered with every default interpreter.
from clarice.std.core import populate_list_module, populate_text_module
from clarice.std.extra import populate_markdown_module
from clarice.std.io import BasicIO, populate_file_module


def populate_standard_modules(registry, basic_io: BasicIO = None):
    basic_io = basic_io or BasicIO()
    registry.register('Clarice/Extra/Markdown', populate_markdown_module(basic_io))
    registry.register('Clarice/Core/Text', populate_text_module())
    registry.register('Clarice/Core/List', populate_list_module())
    registry.register('Clarice/Core/File', populate_file_module(basic_io))
    return registry
