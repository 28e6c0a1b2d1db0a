"""Implement a scanner for the Planning Domain Definition Language (PDDL).

Reference: PDDL - The Planning Domain Definition Language (Version 1.2) (Ghallab et al., 1998)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterator

from symbolic_planning.errors import PDDLSyntaxError

PDDL_NAME_REGEX = r"[a-zA-Z]{1}[a-zA-Z0-9\-_]*"
"""Names in PDDL begin with a letter and contain only letters, digits, hyphens, and underscores."""


class PDDLTokenType(StrEnum):
    """Enumeration of token types when parsing PDDL."""

    NAME = PDDL_NAME_REGEX
    """Name of a PDDL domain, type, predicate, operator, etc."""

    VARIABLE = r"\?" + PDDL_NAME_REGEX
    """Name of a PDDL variable."""

    KEYWORD = r":" + PDDL_NAME_REGEX
    """A PDDL keyword starts with a colon."""

    NUMBER = r"-?\d+(?:\.\d+)?"
    """A numeric literal (e.g., in a numeric effect or an initial function value)."""

    MINUS = r"-"
    """Separates PDDL entities from their types in typed lists (or denotes subtraction)."""

    OPERATOR = r"<=|>=|[<>=+*/]"
    """A comparison or arithmetic operator (or `=` as the built-in equality predicate)."""

    OPEN_PAREN = r"\("
    """An open parenthesis."""

    CLOSE_PAREN = r"\)"
    """A close parenthesis."""

    COMMENT = r";[^\n]*"
    """Comments in PDDL begin with a semicolon and end with the next newline."""

    NEWLINE = r"\n"

    SKIP = r"[ \t\r]+"
    """Whitespace to be ignored."""

    END = r"\Z"
    """The end of the input string."""

    MISMATCH = r"."
    """Any other character is a mismatch."""

    @property
    def named_group_regex(self) -> str:
        """Retrieve the named group regular expression for the token type."""
        return f"(?P<{self.name}>{self.value})"


@dataclass(frozen=True)
class PDDLToken:
    """A token scanned from a string of PDDL.

    Reference: https://docs.python.org/3/library/re.html#writing-a-tokenizer
    """

    type_: PDDLTokenType
    value: str
    line: int
    column: int

    def __str__(self) -> str:
        """Return a description of the token and its location."""
        return f"'{self.value}' ({self.type_.name}) at line {self.line}, column {self.column}"


PDDL_REQ_FLAGS = {
    ":strips": "Basic STRIPS-style adds and deletes",
    ":typing": "Allow type names in declarations of variables",
    ":negative-preconditions": "Allow `not` in goal descriptions",
    ":disjunctive-preconditions": "Allow `or` and `imply` in goal descriptions",
    ":equality": "Support `=` as built-in predicate",
    ":existential-preconditions": "Allow `exists` in goal descriptions",
    ":universal-preconditions": "Allow `forall` in goal descriptions",
    ":quantified-preconditions": "Allow existential and universal preconditions",
    ":conditional-effects": "Allow `when` in action effects",
    ":derived-predicates": "Allow predicates defined by `:derived` rules",
    ":action-costs": "Support the `total-cost` function to define action costs",
    ":numeric-fluents": "Allow numeric functions (only constant action costs are planned for)",
    ":fluents": "Alias of :numeric-fluents",
    ":adl": (
        "Support :strips + :typing + :disjunctive-preconditions + "
        ":equality + :quantified-preconditions + :conditional-effects"
    ),
}
"""Definitions for supported PDDL requirements flags.

Reference: Section 15 ("Current Requirement Flags") of Ghallab et al. (1998).
"""

PDDL_KEYWORDS = frozenset(
    {
        ":requirements",
        ":types",
        ":constants",
        ":predicates",
        ":functions",
        ":action",
        ":parameters",
        ":vars",
        ":precondition",
        ":effect",
        ":derived",
        ":domain",
        ":objects",
        ":init",
        ":goal",
        ":metric",
    },
)
"""Keywords that structure PDDL domains and problems."""


class PDDLScanner:
    """A scanner for a subset of the Planning Domain Definition Language (PDDL).

    PDDL is case-insensitive, so the scanner lowercases all names, variables, and keywords.
    """

    def __init__(self) -> None:
        """Initialize regular expressions for scanning tokens of PDDL.

        Reference: https://docs.python.org/3/library/re.html#writing-a-tokenizer
        """
        self.token_regex = re.compile("|".join(tt.named_group_regex for tt in PDDLTokenType))
        self.keywords = PDDL_KEYWORDS | PDDL_REQ_FLAGS.keys()

    def tokenize(self, string: str) -> Iterator[PDDLToken]:
        """Tokenize a string of PDDL into an iterator over tokens, ending with an END token.

        :param string: String containing PDDL to be tokenized
        :yield: Iterator over PDDL tokens in the string
        :raises PDDLSyntaxError: If the string contains an unknown keyword or character
        """
        line_num = 1
        line_start = 0
        for mo in self.token_regex.finditer(string):
            if mo.lastgroup is None:
                raise PDDLSyntaxError(f"Failed to tokenize string into PDDL:\n{string}")

            token_type: PDDLTokenType = getattr(PDDLTokenType, mo.lastgroup)
            value = mo.group()
            column = mo.start() - line_start + 1

            match token_type:
                case PDDLTokenType.NAME | PDDLTokenType.VARIABLE:
                    value = value.lower()

                case PDDLTokenType.KEYWORD:
                    value = value.lower()
                    if value not in self.keywords:
                        raise PDDLSyntaxError(
                            f"Unknown PDDL keyword '{value}' at line {line_num}, column {column}.",
                        )

                case PDDLTokenType.MISMATCH:
                    raise PDDLSyntaxError(
                        f"Cannot tokenize '{value}' at line {line_num}, column {column}.",
                    )

                case PDDLTokenType.COMMENT | PDDLTokenType.SKIP:
                    continue  # Skip comments and whitespace

                case PDDLTokenType.NEWLINE:
                    line_start = mo.end()
                    line_num += 1
                    continue

                case _:
                    pass

            yield PDDLToken(token_type, value, line_num, column)

            if token_type is PDDLTokenType.END:
                return
