"""Tests for the terminal approval handler."""

import pytest
from rich.console import Console
from rich.panel import Panel

from say10.safety.models import ApprovalRequest
from say10.ui.approval import TerminalApprovalHandler
from say10.ui.console import Say10Console


def render(panel: Panel) -> str:
    """Render a panel to plain text."""
    console = Console(width=100, no_color=True)
    with console.capture() as capture:
        console.print(panel)
    return capture.get()


@pytest.fixture
def handler():
    """Terminal handler with a colorless console."""
    return TerminalApprovalHandler(Say10Console(no_color=True))


class TestFormatApprovalPrompt:
    """Test TerminalApprovalHandler.format_approval_prompt method."""

    def test_panel_contents(self, handler):
        """Test that the panel shows command and reason."""
        request = ApprovalRequest.from_command("curl https://example.com")

        text = render(handler.format_approval_prompt(request))

        assert "Approval Required" in text
        assert "curl https://example.com" in text
        assert "Not whitelisted" in text
        assert "Destructive action" not in text

    def test_destructive_sudo_warnings(self, handler):
        """Test that risky commands carry explicit warnings."""
        request = ApprovalRequest.from_command("systemctl restart nginx")

        panel = handler.format_approval_prompt(request)
        text = render(panel)

        assert "🚨" in str(panel.title)
        assert panel.border_style == "red bold"
        assert text.count("Destructive action") == 2
        assert text.count("Requires sudo/root privileges") == 2

    def test_low_risk_style(self, handler):
        """Test the border color for a merely unknown command."""
        request = ApprovalRequest.from_command("curl https://example.com")

        panel = handler.format_approval_prompt(request)

        assert panel.border_style == "yellow"


class TestRequestApproval:
    """Test TerminalApprovalHandler.request_approval method."""

    @pytest.mark.asyncio
    async def test_operator_approves(self, handler, monkeypatch):
        """Test that a yes at the prompt approves the command."""
        asked = []

        def fake_confirm(message, default=False, console=None):
            asked.append((message, default))
            return True

        monkeypatch.setattr("say10.ui.approval.confirm", fake_confirm)

        response = await handler(ApprovalRequest.from_command("rm file"))

        assert response.approved is True
        assert asked == [("Run this command?", False)]

    @pytest.mark.asyncio
    async def test_operator_declines(self, handler, monkeypatch):
        """Test that a no at the prompt denies the command."""
        monkeypatch.setattr("say10.ui.approval.confirm", lambda *a, **kw: False)

        response = await handler.request_approval(ApprovalRequest.from_command("rm file"))

        assert response.approved is False
        assert response.reason == "Operator declined at the terminal prompt"
        assert response.timed_out is False
