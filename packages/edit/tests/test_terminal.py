"""Tests for pi_edit.terminal — ProcessTerminal driven over a pseudo-terminal"""
import io
import os

import pytest

from pi_edit.keys import KeyEvent
from pi_edit.terminal import (
    CLEAR_LINE,
    CLEAR_SCREEN,
    HIDE_CURSOR,
    SHOW_CURSOR,
    Position,
    ProcessTerminal,
    move_to,
    terminal_session,
)


class TestEscapeSequences:
    def test_move_to_is_one_based(self):
        assert move_to(Position(0, 0)) == "\x1b[1;1H"
        assert move_to(Position(x=4, y=2)) == "\x1b[3;5H"

    def test_constants(self):
        assert CLEAR_SCREEN == "\x1b[2J"
        assert CLEAR_LINE == "\x1b[2K"
        assert HIDE_CURSOR == "\x1b[?25l"
        assert SHOW_CURSOR == "\x1b[?25h"


class TestQueue:
    def test_nothing_written_before_flush(self):
        out = io.StringIO()
        term = ProcessTerminal(stdout=out)
        term.hide_cursor()
        term.clear_current_line()
        term.print("hello")
        assert out.getvalue() == ""
        term.flush()
        assert out.getvalue() == HIDE_CURSOR + CLEAR_LINE + "hello"

    def test_flush_empties_queue(self):
        out = io.StringIO()
        term = ProcessTerminal(stdout=out)
        term.print("a")
        term.flush()
        term.flush()
        assert out.getvalue() == "a"

    def test_write_log(self, tmp_path, monkeypatch):
        log = tmp_path / "writes.log"
        monkeypatch.setenv("PI_EDIT_WRITE_LOG", str(log))
        term = ProcessTerminal(stdout=io.StringIO())
        term.clear_screen()
        term.print("x")
        term.flush()
        assert log.read_text(encoding="utf-8") == CLEAR_SCREEN + "x"

    def test_query_size_not_a_tty(self, tmp_path):
        with open(tmp_path / "out.txt", "w") as out:
            term = ProcessTerminal(stdout=out)
            with pytest.raises(OSError):
                term.query_size()


@pytest.fixture
def pty_terminal():
    master, slave = os.openpty()
    stdin = os.fdopen(slave, "r", closefd=False)
    stdout = os.fdopen(os.dup(slave), "w")
    term = ProcessTerminal(stdin=stdin, stdout=stdout)
    yield term, master, slave
    stdout.close()
    stdin.close()
    os.close(slave)
    os.close(master)


@pytest.mark.tty
class TestProcessTerminal:
    def test_raw_mode_round_trip(self, pty_terminal):
        import termios

        term, master, slave = pty_terminal
        before = termios.tcgetattr(slave)
        with terminal_session(term):
            during = termios.tcgetattr(slave)
            assert not during[3] & termios.ICANON
            assert not during[3] & termios.ECHO
        assert termios.tcgetattr(slave) == before

    def test_initialize_clears_and_homes(self, pty_terminal):
        term, master, slave = pty_terminal
        term.initialize()
        try:
            data = os.read(master, 1024).decode()
        finally:
            term.terminate()
        assert data == CLEAR_SCREEN + move_to(Position(0, 0))

    def test_query_size(self, pty_terminal):
        import fcntl
        import struct
        import termios

        term, master, slave = pty_terminal
        fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 30, 100, 0, 0))
        size = term.query_size()
        assert (size.height, size.width) == (30, 100)

    def test_read_events(self, pty_terminal):
        term, master, slave = pty_terminal
        with terminal_session(term):
            os.write(master, b"\x1b[A\x1b[6~\x11")
            assert term.read_event() == KeyEvent("up")
            assert term.read_event() == KeyEvent("pageDown")
            assert term.read_event() == KeyEvent("ctrl+q")

    def test_lone_escape_delivered_after_timeout(self, pty_terminal):
        term, master, slave = pty_terminal
        with terminal_session(term):
            os.write(master, b"\x1b")
            assert term.read_event() == KeyEvent("escape")

    def test_unknown_sequences_skipped(self, pty_terminal):
        term, master, slave = pty_terminal
        with terminal_session(term):
            os.write(master, b"\x1b[999~\x1b[B")
            assert term.read_event() == KeyEvent("down")
