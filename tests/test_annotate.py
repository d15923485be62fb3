"""pytest tests for line annotation."""

import dataclasses

import pytest

from maxlog_cli.core.annotate import (
    LEFT_CAP,
    RIGHT_CAP,
    RULES,
    annotate,
    downplay,
    highlight,
    matches_focus,
    rules_for,
    set_label,
)
from maxlog_cli.utils.colors import Colors, LabelKind


def label(text: str, kind: LabelKind) -> str:
    return (
        f"{kind.foreground}{LEFT_CAP}{Colors.RESET}"
        f"{kind.background}{text}{Colors.RESET}"
        f"{kind.foreground}{RIGHT_CAP}{Colors.RESET}"
    )


def test_error_marker_becomes_red_label():
    result = annotate("[ERROR] boom", "")
    assert result == label("ERROR", LabelKind.RED) + " boom"


def test_rule_labels_and_colors():
    assert annotate("[WARNING ] disk", "") == label("WARN", LabelKind.YELLOW) + " disk"
    assert annotate("[err] x", "") == label("ERROR", LabelKind.RED) + " x"
    assert annotate("[MXServer] up", "") == label("MX", LabelKind.MAGENTA) + " up"
    assert annotate("[maximo] y", "") == label("MAX", LabelKind.CYAN) + " y"
    assert annotate("[AUDIT   ] z", "") == label("AUDIT", LabelKind.BLUE) + " z"


def test_several_rules_apply_to_one_line():
    result = annotate("[MXServer] [ERROR] failed", "")
    assert result == label("MX", LabelKind.MAGENTA) + " " + label("ERROR", LabelKind.RED) + " failed"


def test_only_first_occurrence_is_replaced():
    result = annotate("[INFO] a [INFO] b", "")
    assert result.count("[INFO]") == 1
    assert result.startswith(label("INFO", LabelKind.BLUE))


def test_ready_message_is_labelled_green():
    message = "Maximo is ready for client connections."
    assert annotate(message, "") == label(message, LabelKind.GREEN)


def test_script_marker_uses_tag():
    result = annotate("[maximo.script.MYSCRIPT] running", "MYSCRIPT")
    assert result.startswith(label("Script", LabelKind.LIGHT_BLUE))
    assert "MYSCRIPT" not in result


def test_script_marker_of_other_tag_is_untouched():
    result = annotate("[maximo.script.OTHER] running", "MYSCRIPT")
    assert result == "[maximo.script.OTHER] running"


def test_noise_without_bracket_is_unchanged():
    assert annotate("x CID-CRON y", "") == "x CID-CRON y"


def test_noise_is_downplayed_from_first_bracket():
    result = annotate("12:00 CID-CRON [cron] tick [x]", "")
    assert result == "12:00 CID-CRON" + Colors.DARK_GRAY + " [cron] tick [x]" + Colors.RESET


def test_diagnostic_code_noise_is_downplayed():
    result = annotate("12:00 BMXAA6372I [conn] pooled", "")
    assert Colors.DARK_GRAY + " [conn]" in result
    assert result.endswith(Colors.RESET)


def test_tag_line_is_highlighted_and_tag_labelled():
    result = annotate("12:00 [job] order ABC123 shipped", "ABC123")
    assert Colors.WHITE + " [job]" in result
    assert label("ABC123", LabelKind.GREEN) in result
    assert result.endswith(Colors.RESET)


def test_tab_prefixed_line_is_not_highlighted():
    result = annotate("\t[INFO] nested", "INFO")
    assert result == "\t" + label("INFO", LabelKind.BLUE) + " nested"
    assert LabelKind.GREEN.background not in result


def test_empty_tag_disables_highlighting():
    result = annotate("12:00 [job] anything", "")
    assert result == "12:00 [job] anything"


def test_plain_line_is_idempotent():
    line = "2025-01-01 plain message without markers"
    once = annotate(line, "")
    assert once == line
    assert annotate(once, "") == once


def test_empty_line():
    assert annotate("", "tag") == ""


def test_label_without_nerdfont_has_no_caps():
    result = annotate("[ERROR] boom", "", use_nerdfont=False)
    assert LEFT_CAP not in result and RIGHT_CAP not in result
    assert LabelKind.RED.background + "ERROR" + Colors.RESET in result


def test_set_label_without_match_returns_text():
    assert set_label("abc", "[x]", "X", LabelKind.RED) == "abc"


def test_downplay_and_highlight_need_bracket():
    assert downplay("no bracket") == "no bracket"
    assert highlight("a [b]") == "a" + Colors.WHITE + " [b]" + Colors.RESET


def test_rule_table_is_immutable():
    assert isinstance(RULES, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        RULES[0].label = "changed"


def test_rules_for_only_changes_script_rule():
    scoped = rules_for("T1")
    changed = [(a, b) for a, b in zip(RULES, scoped) if a != b]
    assert len(changed) == 1
    assert changed[0][1].pattern == "[maximo.script.T1]"
    assert rules_for("T1", scoped) == scoped


def test_focus_is_case_insensitive():
    assert matches_focus("Order ABC shipped", "abc")
    assert not matches_focus("Order XYZ shipped", "abc")
    assert matches_focus("anything", "")
