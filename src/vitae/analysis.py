"""Diagnostic extraction from LaTeX compiler output."""

from __future__ import annotations

from typing import Callable, Optional, Union

from vitae.models import Diagnostic


class _Skip:
    """Marker returned by a rule that consumes a line without reporting it."""

    def __repr__(self) -> str:
        return "SKIP"


SKIP = _Skip()

# A rule inspects one line and returns a diagnostic, SKIP, or None for "no match"
RuleResult = Union[Diagnostic, _Skip, None]
LineRule = Callable[[str], RuleResult]


def _parse_line_number(token: str) -> Optional[int]:
    """Return the token as a positive line number, or None."""
    if not token or not token.isascii() or not token.isdigit():
        return None
    number = int(token)
    return number if number > 0 else None


def match_located(line: str) -> RuleResult:
    """Match ``file:line: message`` lines produced by ``-file-line-error``."""
    parts = line.split(":", 2)
    if len(parts) != 3:
        return None

    file_token, line_token, message = parts
    line_number = _parse_line_number(line_token)
    if line_number is None:
        return None

    message = message.strip()
    lowered = message.lower()
    if "error" in lowered or "!" in line:
        severity = "error"
    elif "warning" in lowered:
        severity = "warning"
    elif file_token.strip().lower().endswith(".tex"):
        # pdflatex only prints a located source line for errors
        severity = "error"
    else:
        return SKIP

    return Diagnostic(
        severity=severity,
        message=message,
        line=line_number,
        file=file_token.strip(),
    )


def match_error_marker(line: str) -> RuleResult:
    """Match TeX's ``! message`` error lines."""
    if not line.startswith("! "):
        return None
    return Diagnostic(severity="error", message=line[2:].strip())


def match_latex_warning(line: str) -> RuleResult:
    """Match ``LaTeX Warning`` lines anywhere in the output."""
    if "latex warning" not in line.lower():
        return None
    return Diagnostic(severity="warning", message=line.strip())


class LogAnalyzer:
    """Applies an ordered set of line rules to compiler output."""

    def __init__(self) -> None:
        """Initialize the analyzer with default rules."""
        self.rules: list[LineRule] = []
        self._register_default_rules()

    def _register_default_rules(self) -> None:
        # Priority order: located diagnostics first, then unlocated markers
        self.add_rule(match_located)
        self.add_rule(match_error_marker)
        self.add_rule(match_latex_warning)

    def add_rule(self, rule: LineRule) -> None:
        """Add a new line rule, applied after the existing ones.

        Args:
            rule: Function that takes a line and returns a Diagnostic,
                SKIP to drop the line, or None to defer to later rules
        """
        self.rules.append(rule)

    def analyse_line(self, line: str) -> Optional[Diagnostic]:
        """Apply the rules to one line, stopping at the first that matches.

        Args:
            line: A single line of compiler output

        Returns:
            The diagnostic for the line, or None if it is skipped or unmatched
        """
        for rule in self.rules:
            outcome = rule(line)
            if outcome is None:
                continue
            if outcome is SKIP:
                return None
            return outcome
        return None

    def analyse(self, log: str) -> list[Diagnostic]:
        """Extract diagnostics from compiler output.

        Args:
            log: The captured compiler output

        Returns:
            Diagnostics in the order they appear in the output
        """
        diagnostics: list[Diagnostic] = []
        for line in log.splitlines():
            diagnostic = self.analyse_line(line)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics


# Global analyzer instance
_analyzer = LogAnalyzer()


def analyse_log(log: str) -> list[Diagnostic]:
    """Extract diagnostics from LaTeX compiler output.

    This is the main entry point for log analysis.

    Args:
        log: The captured compiler output

    Returns:
        A list of Diagnostic objects in first-seen order
    """
    return _analyzer.analyse(log)
