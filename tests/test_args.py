import pytest

from roughenough.args import build_parser, parse_args


def test_defaults():
    args = parse_args(["roughtime.example.com", "2002"])
    assert args.hostname == "roughtime.example.com"
    assert args.port == 2002
    assert args.time_format == "%Y-%m-%d %H:%M:%S %Z"
    assert args.num_requests == 1
    assert args.protocol == 14
    assert args.num_unique_servers == 3
    assert args.num_measurement_rounds == 2
    assert args.timeout == 2
    assert args.verbose == 0
    assert args.pub_key is None
    assert not (args.quiet or args.epoch or args.zulu or args.tcp or args.tls)
    assert not (args.set_clock or args.send_report or args.tls_no_verify)


def test_no_positionals_allowed():
    args = parse_args([])
    assert args.hostname is None
    assert args.port is None


def test_hostname_requires_port():
    with pytest.raises(SystemExit):
        parse_args(["roughtime.example.com"])


def test_port_out_of_range():
    with pytest.raises(SystemExit):
        parse_args(["roughtime.example.com", "70000"])


def test_short_options():
    args = parse_args(
        ["127.0.0.1", "2003", "-n", "50", "-k", "AAAA", "-t", "5", "-s", "-f", "%s"]
    )
    assert args.num_requests == 50
    assert args.pub_key == "AAAA"
    assert args.timeout == 5
    assert args.set_clock is True
    assert args.time_format == "%s"


def test_verbose_counts():
    assert parse_args(["-vv"]).verbose == 2


def test_quiet_conflicts_with_verbose():
    with pytest.raises(SystemExit):
        parse_args(["-q", "-v"])


def test_server_list_options():
    args = parse_args(["-l", "servers.json", "-u", "5", "-r", "4", "--report"])
    assert args.server_list == "servers.json"
    assert args.num_unique_servers == 5
    assert args.num_measurement_rounds == 4
    assert args.send_report is True


@pytest.mark.parametrize("option", ["-u", "-r"])
def test_sequence_options_require_server_list(option):
    with pytest.raises(SystemExit):
        parse_args([option, "2"])


def test_tls_no_verify_requires_tls():
    with pytest.raises(SystemExit):
        parse_args(["--tls-no-verify"])
    assert parse_args(["--tls", "--tls-no-verify"]).tls_no_verify is True


def test_negative_count_rejected():
    with pytest.raises(SystemExit):
        parse_args(["-n", "-1"])


def test_version(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--version"])
    assert "2.0.0" in capsys.readouterr().out