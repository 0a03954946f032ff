"""
Token vocabulary and parser limits for the Lox language.

Token types are plain upper-case strings, shared by the token producer (an
external scanner or a JSON token dump) and the parser.

Exports:
    - CANONICAL_TOKENS: every token type, in a stable order
    - token_hashmap: fixed lexeme → token type (punctuation, operators, keywords)
    - keyword_tokens: reserved word → token type
    - SYNC_TOKENS: token types that start a new declaration or statement
    - MAX_ARGUMENTS: soft cap on call arguments and function parameters
    - MAX_NESTING_DEPTH: default bound on nested expressions
    - MAX_STATEMENT_DEPTH: default bound on nested statements and functions
"""

# Single-character tokens
LEFT_PAREN = "LEFT_PAREN"
RIGHT_PAREN = "RIGHT_PAREN"
LEFT_BRACE = "LEFT_BRACE"
RIGHT_BRACE = "RIGHT_BRACE"
COMMA = "COMMA"
DOT = "DOT"
MINUS = "MINUS"
PLUS = "PLUS"
SEMICOLON = "SEMICOLON"
SLASH = "SLASH"
STAR = "STAR"

# One or two character tokens
BANG = "BANG"
BANG_EQUAL = "BANG_EQUAL"
EQUAL = "EQUAL"
EQUAL_EQUAL = "EQUAL_EQUAL"
GREATER = "GREATER"
GREATER_EQUAL = "GREATER_EQUAL"
LESS = "LESS"
LESS_EQUAL = "LESS_EQUAL"

# Literals
IDENTIFIER = "IDENTIFIER"
STRING = "STRING"
NUMBER = "NUMBER"

# Keywords
AND = "AND"
CLASS = "CLASS"
ELSE = "ELSE"
FALSE = "FALSE"
FUN = "FUN"
FOR = "FOR"
IF = "IF"
NIL = "NIL"
OR = "OR"
PRINT = "PRINT"
RETURN = "RETURN"
SUPER = "SUPER"
THIS = "THIS"
TRUE = "TRUE"
VAR = "VAR"
WHILE = "WHILE"

EOF = "EOF"

CANONICAL_TOKENS: list[str] = [
    LEFT_PAREN,
    RIGHT_PAREN,
    LEFT_BRACE,
    RIGHT_BRACE,
    COMMA,
    DOT,
    MINUS,
    PLUS,
    SEMICOLON,
    SLASH,
    STAR,
    BANG,
    BANG_EQUAL,
    EQUAL,
    EQUAL_EQUAL,
    GREATER,
    GREATER_EQUAL,
    LESS,
    LESS_EQUAL,
    IDENTIFIER,
    STRING,
    NUMBER,
    AND,
    CLASS,
    ELSE,
    FALSE,
    FUN,
    FOR,
    IF,
    NIL,
    OR,
    PRINT,
    RETURN,
    SUPER,
    THIS,
    TRUE,
    VAR,
    WHILE,
    EOF,
]

keyword_tokens: dict[str, str] = {
    "and": AND,
    "class": CLASS,
    "else": ELSE,
    "false": FALSE,
    "fun": FUN,
    "for": FOR,
    "if": IF,
    "nil": NIL,
    "or": OR,
    "print": PRINT,
    "return": RETURN,
    "super": SUPER,
    "this": THIS,
    "true": TRUE,
    "var": VAR,
    "while": WHILE,
}

token_hashmap: dict[str, str] = {
    "(": LEFT_PAREN,
    ")": RIGHT_PAREN,
    "{": LEFT_BRACE,
    "}": RIGHT_BRACE,
    ",": COMMA,
    ".": DOT,
    "-": MINUS,
    "+": PLUS,
    ";": SEMICOLON,
    "/": SLASH,
    "*": STAR,
    "!": BANG,
    "!=": BANG_EQUAL,
    "=": EQUAL,
    "==": EQUAL_EQUAL,
    ">": GREATER,
    ">=": GREATER_EQUAL,
    "<": LESS,
    "<=": LESS_EQUAL,
    **keyword_tokens,
}

# Tokens that begin a declaration or statement; panic-mode recovery stops here.
SYNC_TOKENS: frozenset[str] = frozenset(
    {CLASS, FUN, VAR, FOR, IF, WHILE, PRINT, RETURN}
)

MAX_ARGUMENTS = 255

MAX_NESTING_DEPTH = 50

MAX_STATEMENT_DEPTH = 48
