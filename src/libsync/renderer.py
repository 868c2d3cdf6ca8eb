import re
from typing import List

from libsync.generator import Constant, GeneratedModule, GeneratedModules

INDENT = "    "

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

KOTLIN_HARD_KEYWORDS = frozenset(
    {
        "as", "break", "class", "continue", "do", "else", "false", "for",
        "fun", "if", "in", "interface", "is", "null", "object", "package",
        "return", "super", "this", "throw", "true", "try", "typealias",
        "typeof", "val", "var", "when", "while",
    }
)


def kotlin_name(name: str) -> str:
    """Backtick-quotes `name` unless it is a plain, non-reserved identifier."""
    if IDENTIFIER.fullmatch(name) and name not in KOTLIN_HARD_KEYWORDS:
        return name
    return f"`{name}`"


def kotlin_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _defuse_comment_markers(text: str) -> str:
    return text.replace("/*", "/ *").replace("*/", "* /")


class KotlinRenderer:
    """Renders generated module descriptions as Kotlin source files."""

    def render(self, module: GeneratedModule) -> str:
        """
        Renders one module as the content of `<module.name>.kt`.

        Args:
            module: The module description.

        Returns:
            Kotlin source text ending with a single newline.
        """
        lines = ["import kotlin.String", ""]
        lines.extend(self._render_object(module, depth=0))
        return "\n".join(lines) + "\n"

    def render_all(self, modules: GeneratedModules) -> dict[str, str]:
        """Renders every module, keyed by module name."""
        return {module.name: self.render(module) for module in modules}

    def render_constant(self, constant: Constant, depth: int = 0) -> str:
        return "\n".join(self._render_constant(constant, depth))

    def _render_object(self, module: GeneratedModule, depth: int) -> List[str]:
        indent = INDENT * depth
        lines: List[str] = []
        if module.doc:
            lines.extend(self._format_kdoc(module.doc, indent))
        lines.append(f"{indent}object {kotlin_name(module.name)} {{")

        members: List[List[str]] = [
            self._render_constant(constant, depth + 1) for constant in module.constants
        ]
        members.extend(self._render_object(nested, depth + 1) for nested in module.nested)

        for index, member in enumerate(members):
            if index > 0:
                lines.append("")
            lines.extend(member)

        lines.append(f"{indent}}}")
        return lines

    def _render_constant(self, constant: Constant, depth: int) -> List[str]:
        indent = INDENT * depth
        lines: List[str] = []
        if constant.doc:
            lines.extend(self._format_kdoc(constant.doc, indent))

        initializer = kotlin_string(constant.literal)
        if constant.reference is not None:
            reference = constant.reference
            initializer += f" + {kotlin_name(reference.module)}.{kotlin_name(reference.name)}"

        declaration = f"{indent}const val {kotlin_name(constant.name)}: String = {initializer}"

        if not constant.comment:
            lines.append(declaration)
        elif "\n" not in constant.comment:
            lines.append(f"{declaration} // {constant.comment}")
        else:
            first, *rest = _defuse_comment_markers(constant.comment).split("\n")
            lines.append(f"{declaration} /* {first}")
            lines.extend(f"{indent}{line}".rstrip() for line in rest)
            lines.append(f"{indent}*/")
        return lines

    def _format_kdoc(self, doc: str, indent: str) -> List[str]:
        lines = [f"{indent}/**"]
        for line in _defuse_comment_markers(doc).split("\n"):
            lines.append(f"{indent} * {line}".rstrip())
        lines.append(f"{indent} */")
        return lines
