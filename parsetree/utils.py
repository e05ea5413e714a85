import enum

WHITESPACE = " \t\n"


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def is_digit(c: str) -> bool:
    # str.isdigit() also accepts things like superscripts
    return "0" <= c <= "9"


def is_lower(c: str) -> bool:
    return "a" <= c <= "z"
