"""
Tests for the POSIX process querier.

Subprocess calls are patched so the tests describe exactly what ps/lsof
print; the /proc lookup uses a temporary directory as proc root.
"""

from unittest.mock import Mock, patch

import pytest

from sysprobe.inspector.posix import PosixQuerier
from sysprobe.models.config import ProbeConfig
from sysprobe.models.process import Lookup, ProcessInfo
from sysprobe.validation import (
    ProcessNotFoundError,
    ProcessOutputFormatError,
    ProcessQueryError,
    ValidationError,
)

from conftest import PS_OUTPUT, PS_THREADS_OUTPUT, completed

RUN_TOOL_PATH = "sysprobe.inspector.base.subprocess.run"
WHICH_PATH = "sysprobe.system.commands.shutil.which"

IO_CONTENT = "rchar: 2012\nwchar: 6\nsyscr: 7\nsyscw: 1\nread_bytes: 0\nwrite_bytes: 0\n"


def fake_tools(responses):
    """
    Build a subprocess.run side effect answering by argv.

    ``responses`` maps an argv tuple to a CompletedProcess stand-in or an
    exception instance to raise.
    """

    def _run(argv, **kwargs):
        response = responses[tuple(argv)]
        if isinstance(response, Exception):
            raise response
        return response

    return _run


@pytest.fixture
def proc_root(temp_dir):
    """A fake /proc containing an io file for PID 4242."""
    pid_dir = temp_dir / "4242"
    pid_dir.mkdir()
    (pid_dir / "io").write_text(IO_CONTENT)
    return temp_dir


@pytest.fixture
def querier(proc_root):
    return PosixQuerier(ProbeConfig(proc_root=proc_root))


@pytest.fixture
def all_tools_ok():
    return {
        ("ps", "-p", "4242", "-o", "pid,%cpu,%mem,state,user,comm"): completed(0, PS_OUTPUT),
        ("ps", "-T", "-p", "4242"): completed(0, PS_THREADS_OUTPUT),
        ("ps", "-p", "4242", "-o", "lstart="): completed(0, b"Mon Oct 12 09:15:02 2026\n"),
        ("ps", "-o", "ppid=", "-p", "4242"): completed(0, b"  17\n"),
        ("lsof", "-p", "4242", "-i"): completed(0, b"COMMAND PID USER FD TYPE\npython3 4242 alice 3u IPv4\n"),
    }


@pytest.mark.unit
class TestPosixParse:
    """Test cases for parsing ps output."""

    def test_primary_argv(self, querier):
        assert querier.primary_argv(4242) == ["ps", "-p", "4242", "-o", "pid,%cpu,%mem,state,user,comm"]

    def test_parse_maps_fixed_columns(self, querier):
        info = querier.parse(PS_OUTPUT.decode(), 4242)

        assert info == ProcessInfo(
            pid=4242, cpu="0.3", memory="1.2", state="S", user="alice", cmd="python3"
        )

    def test_parse_uses_requested_pid_not_echoed_one(self, querier):
        output = "PID %CPU %MEM S USER COMMAND\n999 1.0 2.0 R bob bash\n"
        assert querier.parse(output, 4242).pid == 4242

    def test_parse_only_second_line_is_used(self, querier):
        output = "PID %CPU %MEM S USER COMMAND\n1 0.0 0.1 S root init\n2 9.9 9.9 R x other\n"
        assert querier.parse(output, 1).cmd == "init"

    @pytest.mark.parametrize("output", ["", "    PID %CPU %MEM S USER     COMMAND\n"])
    def test_parse_without_data_row(self, querier, output):
        with pytest.raises(ProcessNotFoundError, match="no process found with PID 4242"):
            querier.parse(output, 4242)

    def test_parse_with_too_few_fields(self, querier):
        output = "PID %CPU %MEM S USER COMMAND\n4242 0.3 1.2 S\n"
        with pytest.raises(ProcessOutputFormatError, match="unexpected ps output format"):
            querier.parse(output, 4242)


@pytest.mark.unit
class TestPosixPrimaryQuery:
    """Test cases for the primary ps invocation."""

    @patch(RUN_TOOL_PATH)
    def test_tool_missing(self, mock_run, querier):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "ps")

        with pytest.raises(ProcessQueryError, match="failed to run ps"):
            querier.get_process_info(4242)

    @patch(RUN_TOOL_PATH)
    def test_non_zero_exit_means_not_found(self, mock_run, querier):
        mock_run.return_value = completed(1, b"    PID %CPU %MEM S USER COMMAND\n")

        with pytest.raises(ProcessNotFoundError) as exc_info:
            querier.get_process_info(99999)

        assert "no process found with PID 99999" in str(exc_info.value)
        assert exc_info.value.pid == 99999
        assert exc_info.value.tool == "ps"

    @pytest.mark.parametrize("pid", [-1, "abc", 1.5, True, None])
    def test_invalid_pid(self, querier, pid):
        with pytest.raises(ValidationError):
            querier.get_process_info(pid)

    @patch(RUN_TOOL_PATH)
    def test_numeric_string_pid_accepted(self, mock_run, querier, all_tools_ok):
        mock_run.side_effect = fake_tools(all_tools_ok)
        with patch(WHICH_PATH, return_value="/usr/bin/lsof"):
            info = querier.get_process_info("4242")
        assert info.pid == 4242


@pytest.mark.unit
class TestPosixEnrichment:
    """Test cases for the best-effort enrichment lookups."""

    @patch(WHICH_PATH, return_value="/usr/bin/lsof")
    @patch(RUN_TOOL_PATH)
    def test_full_record(self, mock_run, _which, querier, all_tools_ok):
        mock_run.side_effect = fake_tools(all_tools_ok)

        info = querier.get_process_info(4242)

        assert info.cpu == "0.3"
        assert info.threads == [
            "   4242    4242 pts/0    00:00:01 python3",
            "   4242    4250 pts/0    00:00:00 python3",
        ]
        assert info.io_stats == IO_CONTENT
        assert info.start_time == "Mon Oct 12 09:15:02 2026"
        assert info.parent_pid == 17
        assert info.network_connections.startswith("COMMAND PID USER")

    @patch(WHICH_PATH, return_value="/usr/bin/lsof")
    @patch(RUN_TOOL_PATH)
    def test_unreadable_io_only_clears_io_stats(self, mock_run, _which, temp_dir, all_tools_ok):
        mock_run.side_effect = fake_tools(all_tools_ok)
        querier = PosixQuerier(ProbeConfig(proc_root=temp_dir / "missing"))

        info = querier.get_process_info(4242)

        assert info.io_stats == ""
        assert (info.pid, info.cpu, info.memory, info.state, info.user, info.cmd) == (
            4242, "0.3", "1.2", "S", "alice", "python3"
        )
        assert len(info.threads) == 2
        assert info.start_time == "Mon Oct 12 09:15:02 2026"
        assert info.parent_pid == 17
        assert info.network_connections != ""

    @patch(WHICH_PATH, return_value="/usr/bin/lsof")
    @patch(RUN_TOOL_PATH)
    def test_every_lookup_failing_keeps_primary_record(self, mock_run, _which, temp_dir, all_tools_ok):
        responses = dict(all_tools_ok)
        responses[("ps", "-T", "-p", "4242")] = completed(1)
        responses[("ps", "-p", "4242", "-o", "lstart=")] = OSError("boom")
        responses[("ps", "-o", "ppid=", "-p", "4242")] = completed(1)
        responses[("lsof", "-p", "4242", "-i")] = completed(1)
        mock_run.side_effect = fake_tools(responses)
        querier = PosixQuerier(ProbeConfig(proc_root=temp_dir))

        info = querier.get_process_info(4242)

        assert info == ProcessInfo(
            pid=4242, cpu="0.3", memory="1.2", state="S", user="alice", cmd="python3"
        )

    @patch(WHICH_PATH, return_value="/usr/bin/lsof")
    @patch(RUN_TOOL_PATH)
    def test_lookups_run_even_after_earlier_failures(self, mock_run, _which, querier, all_tools_ok):
        responses = dict(all_tools_ok)
        responses[("ps", "-T", "-p", "4242")] = FileNotFoundError("ps")
        mock_run.side_effect = fake_tools(responses)

        info = querier.get_process_info(4242)

        assert info.threads == []
        assert info.parent_pid == 17
        called = [tuple(call.args[0]) for call in mock_run.call_args_list]
        assert ("lsof", "-p", "4242", "-i") in called

    def test_malformed_primary_output_skips_enrichment(self, querier):
        querier.primary_query = Mock(return_value="garbage\n")
        querier.enrich = Mock()
        querier.lookup_threads = Mock()

        with pytest.raises(ProcessNotFoundError):
            querier.get_process_info(4242)

        querier.enrich.assert_not_called()
        querier.lookup_threads.assert_not_called()

    def test_bad_column_count_skips_enrichment(self, querier):
        querier.primary_query = Mock(return_value="HEADER\nonly three fields\n")
        querier.enrich = Mock()

        with pytest.raises(ProcessOutputFormatError):
            querier.get_process_info(4242)

        querier.enrich.assert_not_called()

    @patch(RUN_TOOL_PATH)
    def test_enrichment_disabled(self, mock_run, proc_root):
        mock_run.return_value = completed(0, PS_OUTPUT)
        querier = PosixQuerier(ProbeConfig(proc_root=proc_root, enable_enrichment=False))

        info = querier.get_process_info(4242)

        assert mock_run.call_count == 1
        assert info.threads == [] and info.io_stats == "" and info.parent_pid == 0


@pytest.mark.unit
class TestPosixLookups:
    """Test cases for individual lookups and their Lookup results."""

    @patch(RUN_TOOL_PATH)
    def test_threads_drop_header_and_blank_lines(self, mock_run, querier):
        mock_run.return_value = completed(0, PS_THREADS_OUTPUT)

        lookup = querier.lookup_threads(4242)

        assert lookup.present
        assert len(lookup.value) == 2
        assert all("PID" not in line for line in lookup.value)

    @patch(RUN_TOOL_PATH)
    def test_threads_header_only(self, mock_run, querier):
        mock_run.return_value = completed(0, b"PID SPID TTY TIME CMD\n")
        assert querier.lookup_threads(4242) == Lookup.found([])

    def test_io_stats_read_verbatim(self, querier):
        assert querier.lookup_io_stats(4242).value == IO_CONTENT

    def test_io_stats_missing_file(self, querier):
        lookup = querier.lookup_io_stats(1)
        assert not lookup.present
        assert "cannot read" in lookup.reason

    @patch(RUN_TOOL_PATH)
    def test_start_time_is_stripped(self, mock_run, querier):
        mock_run.return_value = completed(0, b"  Tue Oct 13 08:00:00 2026  \n")
        assert querier.lookup_start_time(4242).value == "Tue Oct 13 08:00:00 2026"

    @patch(RUN_TOOL_PATH)
    def test_parent_pid_parse_failure(self, mock_run, querier):
        mock_run.return_value = completed(0, b"not-a-number\n")

        lookup = querier.lookup_parent_pid(4242)

        assert not lookup.present
        assert lookup.value_or(0) == 0

    @patch(RUN_TOOL_PATH)
    def test_parent_pid_empty_output(self, mock_run, querier):
        mock_run.return_value = completed(0, b"\n")
        assert not querier.lookup_parent_pid(4242).present

    @patch(WHICH_PATH, return_value=None)
    @patch(RUN_TOOL_PATH)
    def test_network_connections_without_lsof(self, mock_run, _which, querier):
        lookup = querier.lookup_network_connections(4242)

        assert not lookup.present
        assert "not installed" in lookup.reason
        mock_run.assert_not_called()

    @patch(WHICH_PATH, return_value="/opt/bin/lsof")
    @patch(RUN_TOOL_PATH)
    def test_network_connections_uses_configured_lsof(self, mock_run, _which, proc_root):
        mock_run.return_value = completed(0, b"raw lsof text\n")
        querier = PosixQuerier(ProbeConfig(proc_root=proc_root, lsof_command="/opt/bin/lsof"))

        assert querier.lookup_network_connections(4242).value == "raw lsof text\n"
        assert mock_run.call_args.args[0] == ["/opt/bin/lsof", "-p", "4242", "-i"]
