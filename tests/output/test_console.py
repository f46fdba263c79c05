"""Tests for the StringIO-backed console factory."""

from rich.text import Text

from nexusctl.output.console import create_console, get_output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print(Text("hello", style="nexus.ok"))
        assert get_output(console) == "hello\n"

    def test_default_width_fits_object_ids(self) -> None:
        console = create_console()
        console.print("0x" + "a" * 64)
        assert len(get_output(console).splitlines()) == 1

    def test_width_override(self) -> None:
        assert create_console(width=40).width == 40
