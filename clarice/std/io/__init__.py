from .basic_io import BasicIO
from .console import ConsoleIO
from clarice.builtin_function import BuiltinFunction
from clarice.errors import type_error
from clarice.modules import ModuleObject
from typing import List, Any


def populate_file_module(basic_io: BasicIO = None) -> ModuleObject:
        basic_io = basic_io or BasicIO()
        file_module = ModuleObject('File')

        def file_read(args: List[Any]) -> Any:
            filename = args[0]
            if not isinstance(filename, str):
                raise type_error('File.Read filename argument must be String')
            return basic_io.read_text(filename)

        def file_write(args: List[Any]) -> Any:
            filename, data = args
            if not isinstance(filename, str):
                raise type_error('File.Write filename argument must be String')
            if not isinstance(data, str):
                raise type_error('File.Write data argument must be String')
            return basic_io.write_text(filename, data)

        def file_append(args: List[Any]) -> Any:
            filename, data = args
            if not isinstance(filename, str):
                raise type_error('File.Append filename argument must be String')
            if not isinstance(data, str):
                raise type_error('File.Append data argument must be String')
            return basic_io.write_text(filename, data, append=True)

        def file_exists(args: List[Any]) -> Any:
            filename = args[0]
            if not isinstance(filename, str):
                raise type_error('File.Exists filename argument must be String')
            return basic_io.file_exists(filename)

        def file_delete(args: List[Any]) -> Any:
            filename = args[0]
            if not isinstance(filename, str):
                raise type_error('File.Delete filename argument must be String')
            return basic_io.delete_file(filename)

        file_module.members['Read'] = BuiltinFunction('Read', 1, file_read)
        file_module.members['Write'] = BuiltinFunction('Write', 2, file_write)
        file_module.members['Append'] = BuiltinFunction('Append', 2, file_append)
        file_module.members['Exists'] = BuiltinFunction('Exists', 1, file_exists)
        file_module.members['Delete'] = BuiltinFunction('Delete', 1, file_delete)

        return file_module
