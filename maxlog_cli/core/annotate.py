"""
Line annotation for terminal output.

Known log markers such as ``[ERROR]`` or ``[MXServer]`` are replaced with
colored labels, cron heartbeat noise is dimmed, and lines mentioning the
user's tag are brightened with the tag itself labelled in green.
"""

from dataclasses import dataclass
from typing import Tuple

from maxlog_cli.utils.colors import Colors, LabelKind

LEFT_CAP = "\ue0b6"
RIGHT_CAP = "\ue0b4"

NOISE_SENTINELS = ("CID-CRON", " BMXAA6372I")

SCRIPT_PATTERN = "[maximo.script.{tag}]"


@dataclass(frozen=True)
class AnnotationRule:
    """A marker to replace, the label to show instead and its color scheme."""
    pattern: str
    label: str
    kind: LabelKind


RULES: Tuple[AnnotationRule, ...] = (
    AnnotationRule("[INFO]", "INFO", LabelKind.BLUE),
    AnnotationRule("[INFO ]", "INFO", LabelKind.BLUE),
    AnnotationRule("[AUDIT   ]", "AUDIT", LabelKind.BLUE),
    AnnotationRule("[WARN]", "WARN", LabelKind.YELLOW),
    AnnotationRule("[WARN ]", "WARN", LabelKind.YELLOW),
    AnnotationRule("[WARNING ]", "WARN", LabelKind.YELLOW),
    AnnotationRule("[ERROR]", "ERROR", LabelKind.RED),
    AnnotationRule("[ERROR   ]", "ERROR", LabelKind.RED),
    AnnotationRule("[err]", "ERROR", LabelKind.RED),
    AnnotationRule("[MXServer]", "MX", LabelKind.MAGENTA),
    AnnotationRule("[MAXIMO_UI]", "UI", LabelKind.MAGENTA),
    AnnotationRule("[maximo]", "MAX", LabelKind.CYAN),
    AnnotationRule("[DEBUG]", "DEBUG", LabelKind.CYAN),
    AnnotationRule(SCRIPT_PATTERN, "Script", LabelKind.LIGHT_BLUE),
    AnnotationRule(
        "Maximo is ready for client connections.",
        "Maximo is ready for client connections.",
        LabelKind.GREEN,
    ),
)


def rules_for(tag: str, rules: Tuple[AnnotationRule, ...] = RULES) -> Tuple[AnnotationRule, ...]:
    """Return ``rules`` with the script marker scoped to ``tag``."""
    return tuple(
        AnnotationRule(rule.pattern.format(tag=tag), rule.label, rule.kind)
        if rule.pattern == SCRIPT_PATTERN else rule
        for rule in rules
    )


def set_label(text: str, pattern: str, label: str, kind: LabelKind, use_nerdfont: bool = True) -> str:
    """
    Replace the first occurrence of ``pattern`` with a colored label.

    Args:
        text: Line to decorate
        pattern: Substring to replace
        label: Text shown inside the label
        kind: Color scheme of the label
        use_nerdfont: Draw rounded caps around the label

    Returns:
        The decorated line, or ``text`` unchanged when ``pattern`` is absent
    """
    left, right = (LEFT_CAP, RIGHT_CAP) if use_nerdfont else ("", "")
    fg, bg = kind.foreground, kind.background
    decorated = (
        f"{fg}{left}{Colors.RESET}"
        f"{bg}{label}{Colors.RESET}"
        f"{fg}{right}{Colors.RESET}"
    )
    return text.replace(pattern, decorated, 1)


def _tint(text: str, color: str) -> str:
    # Color everything from the first " [" onwards
    if " [" in text:
        return text.replace(" [", color + " [", 1) + Colors.RESET
    return text


def downplay(text: str) -> str:
    """Dim a line from its first bracketed field onwards."""
    return _tint(text, Colors.DARK_GRAY)


def highlight(text: str) -> str:
    """Brighten a line from its first bracketed field onwards."""
    return _tint(text, Colors.WHITE)


def is_noise(text: str) -> bool:
    return any(sentinel in text for sentinel in NOISE_SENTINELS)


def annotate(
    line: str,
    tag: str = "",
    use_nerdfont: bool = True,
    rules: Tuple[AnnotationRule, ...] = RULES,
) -> str:
    """
    Decorate a raw log line for the terminal.

    Every rule replaces at most its first match. Noise lines are dimmed.
    Lines containing ``tag`` are brightened and the tag labelled, except
    tab-indented continuation lines such as stack frames.

    Args:
        line: Raw log line without trailing newline
        tag: Optional tag to highlight; empty disables highlighting
        use_nerdfont: Draw Nerd Font caps around labels
        rules: Rule table; the script marker is scoped to ``tag``

    Returns:
        The annotated line
    """
    text = line
    for rule in rules_for(tag, rules):
        text = set_label(text, rule.pattern, rule.label, rule.kind, use_nerdfont)

    if is_noise(text):
        text = downplay(text)

    if tag and tag in text and not text.startswith("\t"):
        text = highlight(text)
        text = set_label(text, tag, tag, LabelKind.GREEN, use_nerdfont)

    return text


def matches_focus(line: str, focus: str) -> bool:
    """Return True when ``focus`` is empty or appears in ``line``, ignoring case."""
    if not focus:
        return True
    return focus.casefold() in line.casefold()
