from __future__ import annotations

from enum import IntEnum

VINE_VERSION = "0.1.0"
VINE_TAB_STOP = 4
VINE_QUIT_TIMES = 3
VINE_LINE_NUMBER_PADDING = 4
GUTTER_WIDTH = VINE_LINE_NUMBER_PADDING + 1
MESSAGE_TIMEOUT = 5


class Highlight(IntEnum):
    NORMAL = 0
    COMMENT = 1
    MLCOMMENT = 2
    KEYWORD1 = 3
    KEYWORD2 = 4
    STRING = 5
    NUMBER = 6
    MATCH = 7


HL_HIGHLIGHT_NUMBERS = 1 << 0
HL_HIGHLIGHT_STRINGS = 1 << 1

SEPARATORS = ",.()+-/*^=@#~&%$`\xb4<>[]{}!\\:|;?"
WHITESPACE = " \t\n\v\f\r"

# ANSI sequences.
ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_CLEAR_SCREEN = "\x1b[2J"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_INVERT_OFF = "\x1b[m"
ANSI_DEFAULT_FG = "\x1b[39m"


def ctrl(ch: str) -> int:
    return ord(ch.upper()) & 0x1F


# Key actions.
CTRL_D = ctrl("d")
CTRL_F = ctrl("f")
CTRL_H = ctrl("h")
CTRL_J = ctrl("j")
CTRL_K = ctrl("k")
CTRL_L = ctrl("l")
CTRL_Q = ctrl("q")
CTRL_S = ctrl("s")
CTRL_X = ctrl("x")
ENTER = 13
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
DEL_KEY = 1004
HOME_KEY = 1005
END_KEY = 1006
PAGE_UP = 1007
PAGE_DOWN = 1008

# Bytes following ESC for the keys the editor understands.
ESCAPE_SEQUENCES: dict[bytes, int] = {
    b"[A": ARROW_UP,
    b"[B": ARROW_DOWN,
    b"[C": ARROW_RIGHT,
    b"[D": ARROW_LEFT,
    b"[H": HOME_KEY,
    b"[F": END_KEY,
    b"OH": HOME_KEY,
    b"OF": END_KEY,
    b"[1~": HOME_KEY,
    b"[7~": HOME_KEY,
    b"[4~": END_KEY,
    b"[8~": END_KEY,
    b"[3~": DEL_KEY,
    b"[5~": PAGE_UP,
    b"[6~": PAGE_DOWN,
}

# Language tables. A trailing "|" marks a secondary keyword.
C_HL_EXTENSIONS = (".c", ".h", ".cpp", ".hpp", ".cc", ".hh", ".cxx", ".hxx")
C_HL_KEYWORDS = (
    # C keywords.
    "auto", "break", "case", "const", "continue", "default", "do", "else",
    "enum", "extern", "for", "goto", "if", "register", "return", "sizeof",
    "static", "struct", "switch", "typedef", "union", "volatile", "while",
    "__asm__", "NULL",
    # C++ keywords.
    "alignas", "alignof", "and", "and_eq", "asm", "bitand", "bitor", "class",
    "compl", "constexpr", "const_cast", "deltype", "delete", "dynamic_cast",
    "explicit", "export", "false", "friend", "inline", "mutable", "using",
    "namespace", "new", "noexcept", "not", "not_eq", "nullptr", "operator",
    "or", "or_eq", "private", "protected", "public", "reinterpret_cast",
    "static_assert", "static_cast", "template", "this", "thread_local",
    "throw", "true", "try", "typeid", "typename", "virtual", "xor", "xor_eq",
    # Preprocessor.
    "#define", "#include", "#if", "ifdef", "#ifndef", "#endif", "#error",
    "#warning", "#pragma",
    # Types.
    "int|", "long|", "double|", "float|", "char|", "unsigned|", "signed|",
    "void|", "short|", "auto|", "bool|",
)

GO_HL_EXTENSIONS = (".go",)
GO_HL_KEYWORDS = (
    "if", "else", "switch", "case", "func", "then", "for", "var", "type",
    "interface", "const", "range", "return", "struct", "default", "iota",
    "nil", "package", "import", "map", "break", "continue",
    "int|", "int8|", "int16|", "int32|", "int64|", "uint|", "uint8|",
    "uint16|", "uint32|", "uint64|", "float32|", "float64|", "byte|", "rune|",
    "bool|", "string|", "complex64|", "complex128|", "any|", "error|",
    "comparable|",
)

PY_HL_EXTENSIONS = (".py", "pyi", ".xpy", "pyx", ".pyw", ".ipynb")
PY_HL_KEYWORDS = (
    "and", "as", "assert", "break", "class", "continue", "def", "del", "elif",
    "else", "except", "exec", "finally", "for", "from", "global", "if",
    "import", "in", "is", "lambda", "not", "or", "pass", "print", "raise",
    "return", "try", "while", "with", "yield", "async", "await", "nonlocal",
    "range", "xrange", "reduce", "map", "filter", "all", "any", "sum", "dir",
    "abs", "breakpoint", "compile", "delattr", "divmod", "format", "eval",
    "getattr", "hasattr", "hash", "help", "id", "input", "isinstance",
    "issubclass", "len", "locals", "max", "min", "next", "open", "pow",
    "repr", "reversed", "round", "setattr", "slice", "sorted", "super",
    "vars", "zip", "__import__", "reload", "raw_input", "execfile", "file",
    "cmp", "basestring",
    "buffer|", "bytearray|", "bytes|", "complex|", "float|", "frozenset|",
    "int|", "list|", "long|", "None|", "set|", "str|", "chr|", "tuple|",
    "bool|", "False|", "True|", "type|", "unicode|", "dict|", "ascii|",
    "bin|", "callable|", "classmethod|", "enumerate|", "hex|", "oct|", "ord|",
    "iter|", "memoryview|", "object|", "property|", "staticmethod|",
    "unichr|",
)

RUST_HL_EXTENSIONS = (".rs",)
RUST_HL_KEYWORDS = (
    "as", "async", "await", "const", "crate", "dyn", "enum", "extern", "fn",
    "impl", "let", "mod", "move", "mut", "pub", "ref", "Self", "static",
    "struct", "super", "trait", "type", "union", "unsafe", "use", "where",
    "break", "continue", "else", "for", "if", "in", "loop", "match",
    "return", "while",
    "i8|", "i16|", "i32|", "i64|", "i128|", "isize|", "u8|", "u16|", "u32|",
    "u64|", "u128|", "usize|", "f32|", "f64|", "bool|", "char|", "Box|",
    "Option|", "Some|", "None|", "Result|", "Ok|", "Err|", "String|", "Vec|",
    "let|", "const|", "mod|", "struct|", "enum|", "trait|", "union|",
    "self|", "true|", "false|",
)
