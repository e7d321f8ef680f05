import subprocess
from unittest import mock

from o1agent.netconf_manager import (
    START_COMMAND,
    STOP_COMMAND,
    sigint_handler,
    start_netopeer_server,
    stop_netopeer_server,
)


def _done(code):
    return subprocess.CompletedProcess(args="cmd", returncode=code)


@mock.patch("o1agent.netconf_manager.subprocess.run")
def test_start_success(run):
    run.return_value = _done(0)
    assert start_netopeer_server() is True
    assert run.call_args.args[0] == START_COMMAND
    assert "netopeer2-server" in START_COMMAND


@mock.patch("o1agent.netconf_manager.subprocess.run")
def test_start_failure_status(run):
    run.return_value = _done(1)
    assert start_netopeer_server() is False


@mock.patch("o1agent.netconf_manager.subprocess.run")
def test_start_oserror(run):
    run.side_effect = OSError("no shell")
    assert start_netopeer_server() is False


@mock.patch("o1agent.netconf_manager.subprocess.run")
def test_stop_runs_kill(run):
    run.return_value = _done(0)
    assert stop_netopeer_server() is True
    assert run.call_args.args[0] == STOP_COMMAND
    assert STOP_COMMAND.startswith("kill -9")


@mock.patch("o1agent.netconf_manager.subprocess.run")
def test_stop_abnormal(run):
    run.return_value = _done(-9)
    assert stop_netopeer_server() is False


@mock.patch("o1agent.netconf_manager.subprocess.run")
def test_sigint_handler_stops_server(run):
    run.return_value = _done(1)
    assert sigint_handler(2, None) is None
    assert run.call_count == 1
    assert run.call_args.args[0] == STOP_COMMAND