"""DeDe name prefixes, which choose between naming and commenting an address.

DeDe (the Delphi decompiler) writes Borland-style MAP files where a prefix
on the symbol name says what the entry is:

<-  function entry point: apply as a name
*   VCL control reference: apply as a comment
->  VCL method reference: apply as a comment
"""

from typing import Tuple

FUNCTION_PREFIX = "<-"
CONTROL_PREFIX = "*"
METHOD_PREFIX = "->"

# (prefix, whether entries with this prefix apply to the name), in order of
# precedence
PREFIXES = (
    (FUNCTION_PREFIX, True),
    (CONTROL_PREFIX, False),
    (METHOD_PREFIX, False),
)


def dede_prefix(name: str) -> str:
    """Returns the DeDe prefix of name, or "" if it has none."""
    for prefix, _ in PREFIXES:
        if name.startswith(prefix):
            return prefix
    return ""


def classify(name: str, apply_to_name: bool) -> Tuple[str, bool]:
    """Strips any DeDe prefix from name.

    :param name: decoded symbol name
    :param apply_to_name: configured default, used when there is no prefix
    :return: (name without prefix, whether to apply it as a name rather
      than as a comment)
    """
    prefix = dede_prefix(name)
    if not prefix:
        return name, apply_to_name
    return name[len(prefix):], dict(PREFIXES)[prefix]
