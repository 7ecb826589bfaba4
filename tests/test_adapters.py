"""
Tests for runners — output buffer, winget subprocess runner, mock runner.
"""

import textwrap

from vcredist.adapters.base import LaunchError
from vcredist.adapters.mock import MockRunner
from vcredist.adapters.winget.command import OutputBuffer, WingetRunner
from vcredist.core.observability.log_sink import LogSink


def _script(body: str) -> list[str]:
    """Arguments that make the Python interpreter run ``body``."""
    return ["-c", textwrap.dedent(body)]


# ── Output Buffer Tests ─────────────────────────────────────────────


class TestOutputBuffer:
    def test_keeps_last_200_in_order(self):
        buf = OutputBuffer()
        for i in range(250):
            buf.add(f"line {i}")
        result = buf.snapshot()
        assert len(result.lines) == 200
        assert result.lines[0] == "line 50"
        assert result.lines[-1] == "line 249"
        assert list(result.lines) == [f"line {i}" for i in range(50, 250)]

    def test_custom_capacity(self):
        buf = OutputBuffer(max_lines=3)
        for c in "abcde":
            buf.add(c)
        assert buf.snapshot().lines == ("c", "d", "e")
        assert len(buf) == 3


# ── Winget Runner Tests (real subprocess, Python as the executable) ──


class TestWingetRunner:
    def test_captures_stdout_and_stderr(self, python_exe):
        runner = WingetRunner(LogSink(), executable=python_exe)
        result = runner.run(_script("""
            import sys
            print("  out line  ")
            sys.stdout.flush()
            print("err line", file=sys.stderr)
        """))
        assert "out line" in result.lines
        assert "err line" in result.lines

    def test_filters_spinner_lines(self, python_exe):
        runner = WingetRunner(LogSink(), executable=python_exe)
        result = runner.run(_script("""
            import sys
            data = "\\\\\\n|\\n/\\n-\\n\\u2588\\u2592\\u2591\\n\\nSuccessfully installed\\n"
            sys.stdout.buffer.write(data.encode("utf-8"))
        """))
        assert result.lines == ("Successfully installed",)

    def test_bounded_capture(self, python_exe):
        runner = WingetRunner(LogSink(), executable=python_exe, max_lines=200)
        result = runner.run(_script("""
            for i in range(250):
                print(f"line {i}")
        """))
        assert len(result.lines) == 200
        assert result.lines[-1] == "line 249"
        assert result.lines[0] == "line 50"

    def test_large_output_on_both_streams(self, python_exe):
        runner = WingetRunner(LogSink(), executable=python_exe)
        result = runner.run(_script("""
            import sys
            chunk = "x" * 1000
            for i in range(300):
                sys.stdout.write(chunk + "\\n")
                sys.stderr.write(chunk + "\\n")
        """))
        assert len(result.lines) == 200

    def test_stream_to_log(self, python_exe):
        seen: list[str] = []
        sink = LogSink(deliver=seen.append)
        runner = WingetRunner(sink, executable=python_exe)
        runner.run(_script('print("hello"); print("|")'), stream_to_log=True)
        assert seen == ["hello"]

    def test_no_streaming_by_default(self, python_exe):
        sink = LogSink()
        WingetRunner(sink, executable=python_exe).run(_script('print("quiet")'))
        assert sink.text == ""

    def test_launch_failure_returns_empty(self):
        sink = LogSink()
        runner = WingetRunner(sink, executable="vcredist-no-such-winget-binary")
        result = runner.run(["list", "--id", "Microsoft.VCRedist.2005.x86"])
        assert result.empty
        assert "Could not start 'vcredist-no-such-winget-binary'" in sink.text

    def test_is_available(self, python_exe):
        assert WingetRunner(LogSink(), executable=python_exe).is_available()
        assert not WingetRunner(LogSink(), executable="vcredist-no-such-winget-binary").is_available()

    def test_name(self):
        assert WingetRunner(LogSink()).name == "winget"


class TestLaunchError:
    def test_message(self):
        err = LaunchError("winget", "No such file or directory")
        assert str(err) == "Could not start 'winget': No such file or directory"
        assert err.executable == "winget"


# ── Mock Runner Tests ───────────────────────────────────────────────


class TestMockRunner:
    def test_default_output(self):
        mock = MockRunner(default_output="hello")
        assert mock.run(["list"]).lines == ("hello",)
        assert mock.call_count == 1

    def test_longest_prefix_wins(self):
        mock = MockRunner()
        mock.set_response(("list",), "generic")
        mock.set_response(("list", "--id", "A"), "specific")
        assert mock.run(["list", "--id", "A"]).text == "specific"
        assert mock.run(["list", "--id", "B"]).text == "generic"

    def test_sequenced_outputs(self):
        mock = MockRunner()
        mock.set_response(("install",), "first", "second")
        assert mock.run(["install"]).text == "first"
        assert mock.run(["install"]).text == "second"
        assert mock.run(["install"]).text == "second"

    def test_call_log_and_calls_for(self):
        mock = MockRunner()
        mock.run(["list", "--id", "A"])
        mock.run(["list", "--id", "B"])
        assert mock.call_log[0] == ("list", "--id", "A")
        assert mock.calls_for("B") == [("list", "--id", "B")]

    def test_reset(self):
        mock = MockRunner()
        mock.set_response(("list",), "x")
        mock.run(["list"])
        mock.reset()
        assert mock.call_count == 0
        assert mock.run(["list"]).empty

    def test_simulated_profile(self):
        mock = MockRunner.simulated()
        assert "No installed package found" in mock.run(["list", "--id", "A"]).text
        assert mock.run(["install", "--id", "A"]).text == "Successfully installed"

    def test_is_available(self):
        assert MockRunner(available=True).is_available()
        assert not MockRunner(available=False).is_available()

    def test_streams_to_sink_when_asked(self):
        sink = LogSink()
        mock = MockRunner(default_output="line one\nline two", sink=sink)
        mock.run(["list"])
        assert sink.text == ""
        result = mock.run(["list"], stream_to_log=True)
        assert sink.lines() == ["line one", "line two"]
        assert result.lines == ("line one", "line two")

    def test_stream_without_sink_is_silent(self):
        assert MockRunner(default_output="x").run(["list"], stream_to_log=True).text == "x"

    def test_simulated_takes_sink(self):
        sink = LogSink()
        MockRunner.simulated(sink=sink).run(["upgrade", "--id", "A"], stream_to_log=True)
        assert sink.lines() == ["No available upgrade found."]
