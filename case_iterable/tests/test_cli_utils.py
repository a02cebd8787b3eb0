#!/usr/bin/env python3

from pathlib import Path

import pytest

from case_iterable.cli_utils import reconstruct_command_line


def get_click_command():
    """Helper to get Click command for testing"""
    try:
        from case_iterable.case_iterable import case_iterable

        return case_iterable
    except ImportError:
        return None


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        """Test command reconstruction without active Click context (fallback)"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        result = reconstruct_command_line(click_cmd)
        assert result == "case_iterable"

    def test_reconstruct_command_line_inside_context(self):
        """Test command reconstruction with parameters from an active context"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        source = Path(__file__).parent / "test_data" / "colors.py"
        ctx = click_cmd.make_context("case_iterable", [str(source), "-n", "Color", "-n", "Size", "--format"])
        with ctx:
            result = reconstruct_command_line(click_cmd)
        assert result == "case_iterable colors.py --name Color --name Size --format"

    def test_reconstruct_command_line_negative_flag(self):
        """Test that the off spelling of an on/off flag is kept"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        source = Path(__file__).parent / "test_data" / "colors.py"
        ctx = click_cmd.make_context("case_iterable", [str(source), "--no-format"])
        with ctx:
            result = reconstruct_command_line(click_cmd)
        assert result == "case_iterable colors.py --no-format"

    def test_reconstruct_command_line_omits_unset_flags(self):
        """Test that flags left at their default are not repeated"""
        click_cmd = get_click_command()
        if not click_cmd:
            pytest.skip("Click command not available")

        source = Path(__file__).parent / "test_data" / "colors.py"
        ctx = click_cmd.make_context("case_iterable", [str(source), "-v"])
        with ctx:
            result = reconstruct_command_line(click_cmd)
        assert result == "case_iterable colors.py --verbose"


if __name__ == "__main__":
    pytest.main([__file__])
