import os
from clarice.errors import ClariceError
from clarice.types import ErrorVal, NULL, NullVal


class BasicIO:
    """File access behind the File and Markdown modules."""
    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def read_text(self, filename: str) -> str:
        try:
            with open(filename, 'r', encoding=self.encoding) as f:
                return f.read()
        except FileNotFoundError:
            raise ClariceError(ErrorVal('IOError', f'file {filename} not found'))
        except UnicodeDecodeError:
            raise ClariceError(ErrorVal('IOError', f'{filename} is not valid {self.encoding} text'))
        except OSError as e:
            raise ClariceError(ErrorVal('IOError', f'error reading {filename}: {e.strerror}'))

    def write_text(self, filename: str, data: str, append: bool = False) -> NullVal:
        try:
            with open(filename, 'a' if append else 'w', encoding=self.encoding) as f:
                f.write(data)
            return NULL
        except OSError as e:
            raise ClariceError(ErrorVal('IOError', f'error writing {filename}: {e.strerror}'))

    def delete_file(self, filename: str) -> NullVal:
        try:
            os.remove(filename)
            return NULL
        except OSError as e:
            raise ClariceError(ErrorVal('IOError', f'error deleting {filename}: {e.strerror}'))

    def file_exists(self, filename: str) -> bool:
        return os.path.exists(filename)
