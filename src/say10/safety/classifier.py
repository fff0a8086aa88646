"""Classification of raw command strings.

All functions are pure and operate on a trimmed, lowercased copy of the
command. Matching is plain substring matching: coarse on purpose, so a
harmless command is occasionally flagged rather than a harmful one missed.
"""

from pydantic import BaseModel, ConfigDict

# Subcommands that need root even without an explicit sudo prefix
PRIVILEGED_MARKERS = (
    "systemctl restart",
    "systemctl stop",
    "systemctl start",
    "systemctl enable",
    "systemctl disable",
    "systemctl reload",
    "apt-get",
    "apt ",
    "dpkg",
    "service ",
)

DESTRUCTIVE_MARKERS = (
    # Filesystem
    "rm",
    "rmdir",
    "dd",
    "mkfs",
    "fdisk",
    "parted",
    # Services
    "systemctl restart",
    "systemctl stop",
    "systemctl start",
    "systemctl reload",
    "systemctl enable",
    "systemctl disable",
    # Power
    "shutdown",
    "reboot",
    "poweroff",
    "halt",
    # Processes
    "kill",
    "killall",
    "pkill",
    # Packages
    "apt-get remove",
    "apt remove",
    "apt-get purge",
    "apt purge",
    "apt-get autoremove",
    "apt autoremove",
    "dpkg -r",
    "dpkg --remove",
    "dpkg --purge",
    # Accounts
    "userdel",
    "groupdel",
    # Permissions
    "chmod",
    "chown",
    # Firewall
    "iptables",
    "ufw",
    # Overwriting system locations
    "mv /",
    "cp /",
)

REASON_SUDO = "Requires sudo/root privileges"
REASON_DESTRUCTIVE = "Destructive action"
REASON_NOT_WHITELISTED = "Not whitelisted"


class CommandClassification(BaseModel):
    """Classification of a single command string."""

    model_config = ConfigDict(frozen=True)

    command: str
    requires_sudo: bool
    destructive: bool
    reason: str


def _normalize(command: str) -> str:
    return command.strip().lower()


def requires_sudo(command: str) -> bool:
    """Check whether a command needs elevated privileges.

    Args:
        command: Raw command string

    Returns:
        bool: True for sudo-prefixed commands and privileged subcommands
    """
    cmd = _normalize(command)
    return cmd.startswith("sudo ") or any(marker in cmd for marker in PRIVILEGED_MARKERS)


def is_destructive(command: str) -> bool:
    """Check whether a command contains a destructive verb.

    Args:
        command: Raw command string

    Returns:
        bool: True if any destructive marker occurs in the command
    """
    cmd = _normalize(command)
    return any(marker in cmd for marker in DESTRUCTIVE_MARKERS)


def get_approval_reason(command: str) -> str:
    """Build the human-readable reason a command needs approval.

    Args:
        command: Raw command string

    Returns:
        str: Comma-separated reasons, or "Not whitelisted"
    """
    reasons = []

    if requires_sudo(command):
        reasons.append(REASON_SUDO)

    if is_destructive(command):
        reasons.append(REASON_DESTRUCTIVE)

    if not reasons:
        reasons.append(REASON_NOT_WHITELISTED)

    return ", ".join(reasons)


def classify(command: str) -> CommandClassification:
    """Run all classifiers over a command.

    Args:
        command: Raw command string

    Returns:
        CommandClassification: Combined result
    """
    return CommandClassification(
        command=command,
        requires_sudo=requires_sudo(command),
        destructive=is_destructive(command),
        reason=get_approval_reason(command),
    )


def risk_style(classification: CommandClassification) -> tuple[str, str]:
    """Get the Rich color and icon for a classification.

    Args:
        classification: Result of classify()

    Returns:
        tuple[str, str]: (color, icon)
    """
    if classification.destructive and classification.requires_sudo:
        return "red bold", "🚨"
    if classification.destructive or classification.requires_sudo:
        return "red", "⚠️"
    return "yellow", "⚠️"
