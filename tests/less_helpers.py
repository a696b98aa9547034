import re
from typing import List, Tuple

BLOCK_RE = re.compile(r"([^{}]+?)\s*\{([^{}]*)\}")
DATA_URI_RE = re.compile(r'^url\("data:image/svg\+xml;charset=utf8,([^"\'\\]*)"\)$')

Block = Tuple[str, List[Tuple[str, str]]]


def parse_less(text: str) -> List[Block]:
    """Split generated LESS into (selector, declarations) pairs.

    This is a structural check only, it does not compile LESS: blocks are found
    by brace matching and declarations are read one per line.

    Fails the test when anything outside the expected block structure is left
    over, e.g. a brace or quote leaking out of an embedded icon.
    """
    body = "\n".join(line for line in text.splitlines() if not line.startswith("//"))

    blocks = []
    for m in BLOCK_RE.finditer(body):
        declarations = []
        for line in m.group(2).strip().splitlines():
            line = line.strip()
            assert line.endswith(";"), f"Unterminated declaration: {line}"
            prop, value = line[:-1].split(":", 1)
            declarations.append((prop.strip(), value.strip()))
        blocks.append((m.group(1).strip(), declarations))

    leftover = BLOCK_RE.sub("", body).strip()
    assert leftover == "", f"Unparsed LESS: {leftover[:80]}"
    return blocks


def css_rules(blocks: List[Block]) -> List[Block]:
    """Blocks that produce CSS on their own, i.e. everything but mixin definitions."""
    return [b for b in blocks if not b[0].endswith("()")]
