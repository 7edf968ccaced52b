"""Detection rule catalog for shell installation scripts.

Every rule is a declarative record: a compiled pattern, an optional exclusion
pattern, the category and severity of the finding it produces, its polarity
(violation or good practice), and the issue/suggestion text. New checks are
added as new ``Rule`` entries in ``DEFAULT_RULES``; the classifier never
needs a new branch.

Patterns work on single lines of text. They recognise common shell idioms
found in installation scripts (download-and-run one-liners, permission
changes, package manager calls) without parsing the shell grammar, so a
pattern that does not match simply yields no finding.

Rule groups
-----------
- ``SEC*``: security risks (remote code execution, insecure transport,
  permissive modes, destructive removals, disabled TLS checks, secrets).
- ``BP*``: best-practice issues and the positive structured-logging pattern.
- ``EH*``: unguarded side effects and the positive error-handling patterns.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from installguard.core.evaluator.models import Category, Severity


# ---------------------------------------------------------------------------
# Shared pattern fragments
# ---------------------------------------------------------------------------

# Logging helper names recognised both as a positive line pattern and by the
# whole-script compliance check.
LOGGING_HELPERS: tuple[str, ...] = (
    "log_info",
    "log_error",
    "log_success",
    "log_warning",
    "log_warn",
    "log_debug",
    "log_header",
    "log",
    "info",
    "error",
    "success",
    "warning",
)

# ``set -e``, ``set -euo pipefail``, ``set -o errexit``
STRICT_MODE_PATTERN: re.Pattern[str] = re.compile(
    r"^\s*set\s+(?:-[a-zA-Z]*e[a-zA-Z]*|-o\s+errexit)\b"
)

# Start of a simple command: line start, after a separator, or after a
# control keyword.
_CMD_START = r"(?:^|[;&|]|\bthen\b|\bdo\b|\belse\b)\s*"

_LOGGING_NAMES = "|".join(LOGGING_HELPERS)

# A call, not a definition: ``log_info "x"`` matches, ``log_info () {`` does not.
LOGGING_CALL_PATTERN: re.Pattern[str] = re.compile(
    _CMD_START + rf"(?:{_LOGGING_NAMES})(?!\s*\(\s*\))(?=\s|;|$)"
)


_LOOPBACK_HOSTS = r"(?:localhost|127(?:\.\d{1,3}){3}|0\.0\.0\.0|\[::1\])"

# ``||`` / ``&&`` on the same line, or the command sits in a conditional.
_VISIBLE_GUARD: re.Pattern[str] = re.compile(
    r"\|\||&&|^\s*(?:if|elif|while|until|!)\s"
)


# ---------------------------------------------------------------------------
# Rule record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """A single detection rule.

    Attributes:
        rule_id: Stable identifier (e.g. "SEC001").
        pattern: Compiled regex searched against one line.
        category: Category of the finding this rule produces.
        severity: Severity of the finding this rule produces.
        passed: True when a match exemplifies good practice.
        message: Issue text for violations, or a short description of the
            good pattern for passed rules.
        suggestion: Recommended fix, or an acknowledgement for passed rules.
        exclude: Optional regex; a line matching it is not a hit.
        guard_sensitive: Suppress the rule once a strict-mode directive has
            been seen earlier in the script.
    """

    rule_id: str
    pattern: re.Pattern[str]
    category: Category
    severity: Severity
    passed: bool
    message: str
    suggestion: str
    exclude: re.Pattern[str] | None = None
    guard_sensitive: bool = False

    def matches(self, line: str, *, strict_mode: bool = False) -> bool:
        """Return True when this rule fires on ``line``."""
        if self.guard_sensitive and strict_mode:
            return False
        if self.pattern.search(line) is None:
            return False
        return self.exclude is None or self.exclude.search(line) is None


# ---------------------------------------------------------------------------
# Default rules
# ---------------------------------------------------------------------------

DEFAULT_RULES: tuple[Rule, ...] = (
    # -- Security --
    Rule(
        rule_id="SEC001",
        pattern=re.compile(
            r"\b(?:curl|wget)\b.*\|\s*(?:sudo\s+(?:-\S+\s+)*)?(?:ba|z|da|k)?sh\b"
        ),
        category=Category.SECURITY,
        severity=Severity.CRITICAL,
        passed=False,
        message="Unsafe download pattern: piping remote content directly to shell execution",
        suggestion=(
            "Download the script to a temporary file, verify its checksum or "
            "signature, then execute it"
        ),
    ),
    Rule(
        rule_id="SEC002",
        pattern=re.compile(
            r"\b(?:ba|z)?sh\s+(?:-c\s+[\"']?\$\(|<\()\s*(?:curl|wget)\b"
        ),
        category=Category.SECURITY,
        severity=Severity.CRITICAL,
        passed=False,
        message=(
            "Unsafe download pattern: executing remotely fetched content "
            "through command substitution"
        ),
        suggestion=(
            "Fetch the installer to disk with 'curl -o', verify it, and run "
            "the local copy"
        ),
    ),
    Rule(
        rule_id="SEC003",
        pattern=re.compile(
            r"\b(?:curl|wget|fetch|git\s+clone)\b.*?\bhttp://"
            rf"(?!{_LOOPBACK_HOSTS}(?:[:/\"'\s]|$))"
        ),
        category=Category.SECURITY,
        severity=Severity.HIGH,
        passed=False,
        message="HTTP instead of HTTPS for remote resource",
        suggestion="Use an https:// URL so the download is encrypted and authenticated",
    ),
    Rule(
        rule_id="SEC004",
        pattern=re.compile(
            r"\bchmod\s+(?:-[a-zA-Z]+\s+)*"
            r"(?:0?[0-7]?[0-7]{2}[2367]|[ugo]*[ao][ugo]*\+[rxXst]*w)\b"
        ),
        category=Category.SECURITY,
        severity=Severity.HIGH,
        passed=False,
        message="Overly permissive permissions: world-writable file mode",
        suggestion=(
            "Restrict permissions (755 for directories, 644 or 600 for files) "
            "and grant write access only to the owning user"
        ),
    ),
    Rule(
        rule_id="SEC005",
        pattern=re.compile(
            r"\brm\s+(?:-[a-zA-Z-]+\s+)*[\"']?/\*?[\"']?(?=\s|;|&|\||$)"
        ),
        category=Category.SECURITY,
        severity=Severity.CRITICAL,
        passed=False,
        message="Destructive command: recursive removal targeting the root filesystem",
        suggestion=(
            "Remove only explicit, validated paths under the installation "
            "directory and never the filesystem root"
        ),
    ),
    Rule(
        rule_id="SEC006",
        pattern=re.compile(
            r"\bcurl\b.*\s(?:-[a-zA-Z]*k[a-zA-Z]*|--insecure)\b"
            r"|\bwget\b.*--no-check-certificate\b"
        ),
        category=Category.SECURITY,
        severity=Severity.HIGH,
        passed=False,
        message="TLS certificate verification disabled for remote fetch",
        suggestion="Keep certificate verification on; install the CA certificate instead",
    ),
    Rule(
        rule_id="SEC007",
        pattern=re.compile(
            r"\b[A-Za-z_]*(?:PASSWORD|PASSWD|SECRET|TOKEN|API_?KEY)[A-Za-z_]*="
            r"[\"']?(?![$\"'\s])[^\s\"']{4,}",
            re.IGNORECASE,
        ),
        category=Category.SECURITY,
        severity=Severity.HIGH,
        passed=False,
        message="Hard-coded credential assigned in script",
        suggestion=(
            "Generate secrets at install time (e.g. 'openssl rand') or read "
            "them from the environment or a secrets manager"
        ),
    ),
    Rule(
        rule_id="SEC008",
        pattern=re.compile(_CMD_START + r"eval\s+"),
        category=Category.SECURITY,
        severity=Severity.MEDIUM,
        passed=False,
        message="Dynamic evaluation: eval executes arbitrary strings as code",
        suggestion="Call the command directly or use arrays to build argument lists",
    ),
    # -- Best practice --
    Rule(
        rule_id="BP001",
        pattern=re.compile(
            _CMD_START + r"(?:sudo\s+)?rm\s+(?:-[a-zA-Z-]+\s+)*[^\"'\s#]*\$\{?[A-Za-z_]"
        ),
        category=Category.BEST_PRACTICE,
        severity=Severity.MEDIUM,
        passed=False,
        message="Unquoted variable expansion in rm target may cause word splitting or globbing",
        suggestion='Quote the path, e.g. rm -rf -- "${INSTALL_DIR:?}/cache"',
    ),
    Rule(
        rule_id="BP002",
        pattern=re.compile(
            _CMD_START + r"(?:echo|cd)\s+[^\"'#|;&]*?(?<!\\)\$\{?[A-Za-z_]"
        ),
        category=Category.BEST_PRACTICE,
        severity=Severity.LOW,
        passed=False,
        message="Unquoted variable expansion may cause word splitting or globbing",
        suggestion='Wrap variable expansions in double quotes, e.g. "$VAR"',
    ),
    Rule(
        rule_id="BP003",
        pattern=re.compile(r"`[^`]+`"),
        category=Category.BEST_PRACTICE,
        severity=Severity.LOW,
        passed=False,
        message="Deprecated backtick command substitution",
        suggestion="Use $(...) command substitution, which nests and quotes predictably",
    ),
    Rule(
        rule_id="BP004",
        pattern=re.compile(r"(?:^|[;&|(!]|\bif\b|\bthen\b)\s*which\s+"),
        category=Category.BEST_PRACTICE,
        severity=Severity.LOW,
        passed=False,
        message="Non-portable 'which' lookup for command availability",
        suggestion="Use 'command -v <name> >/dev/null 2>&1' to test for a command",
    ),
    Rule(
        rule_id="BP005",
        pattern=LOGGING_CALL_PATTERN,
        category=Category.BEST_PRACTICE,
        severity=Severity.LOW,
        passed=True,
        message="Structured logging helper call",
        suggestion="Good practice: structured logging keeps installation progress auditable",
    ),
    # -- Error handling --
    Rule(
        rule_id="EH001",
        pattern=re.compile(_CMD_START + r"(?:sudo\s+)?(?:curl|wget)\s"),
        category=Category.ERROR_HANDLING,
        severity=Severity.MEDIUM,
        passed=False,
        message="Network fetch without error handling",
        suggestion=(
            "Enable 'set -euo pipefail' or append '|| { log_error \"...\"; exit 1; }' "
            "to the fetch"
        ),
        exclude=_VISIBLE_GUARD,
        guard_sensitive=True,
    ),
    Rule(
        rule_id="EH002",
        pattern=re.compile(
            _CMD_START
            + r"(?:sudo\s+(?:-\S+\s+)*)?"
            r"(?:apt-get|apt|yum|dnf|zypper|apk|brew|pip3?|npm|yarn)\s+"
            r"(?:-\S+\s+)*(?:install|update|upgrade|add|ci)\b"
        ),
        category=Category.ERROR_HANDLING,
        severity=Severity.MEDIUM,
        passed=False,
        message="Package manager invocation without error handling",
        suggestion="Check the exit status or enable strict mode before installing packages",
        exclude=_VISIBLE_GUARD,
        guard_sensitive=True,
    ),
    Rule(
        rule_id="EH003",
        pattern=re.compile(_CMD_START + r"cd\s+\S"),
        category=Category.ERROR_HANDLING,
        severity=Severity.LOW,
        passed=False,
        message="Directory change without failure check",
        suggestion="Use 'cd \"$DIR\" || exit 1' so later commands never run in the wrong directory",
        exclude=_VISIBLE_GUARD,
        guard_sensitive=True,
    ),
    Rule(
        rule_id="EH004",
        pattern=re.compile(
            r"\|\|\s*(?:\{\s*)?(?:exit|return|die|fail|abort|handle_error|log_error|error)\b"
        ),
        category=Category.ERROR_HANDLING,
        severity=Severity.LOW,
        passed=True,
        message="Explicit failure handling",
        suggestion="Good practice: the failure path is handled explicitly",
    ),
    Rule(
        rule_id="EH005",
        pattern=STRICT_MODE_PATTERN,
        category=Category.ERROR_HANDLING,
        severity=Severity.LOW,
        passed=True,
        message="Strict mode enabled",
        suggestion="Good practice: the script aborts on the first failing command",
    ),
)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class RuleCatalog:
    """An ordered, immutable collection of detection rules.

    Rule order is significant: the classifier reports matches in catalog
    order, which keeps findings for a line deterministic.
    """

    def __init__(self, rules: tuple[Rule, ...] = DEFAULT_RULES) -> None:
        ids = [r.rule_id for r in rules]
        if len(ids) != len(set(ids)):
            raise ValueError("Rule identifiers must be unique")
        self._rules = tuple(rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, rule_id: str) -> Rule | None:
        """Return the rule with ``rule_id``, or None if absent."""
        for rule in self._rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def by_category(self, category: Category) -> tuple[Rule, ...]:
        return tuple(r for r in self._rules if r.category == category)


DEFAULT_CATALOG = RuleCatalog()
