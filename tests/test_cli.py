import pytest

from cserv.cli import Options, UsageError, format_help, main, parse_args


def test_help_lists_every_flag():
    text = format_help()
    assert text.startswith("Usage: cserv [options]\nOptions:\n")
    assert "  -p, --port\tPort number to listen on\n" in text
    assert "  -h, --help\tDisplay this help message\n" in text
    assert "  -d, --directory\tRoot directory to serve\n" in text
    assert "  -v, --version\tDisplay the version of the server\n" in text


def test_no_arguments_is_an_error():
    with pytest.raises(UsageError):
        parse_args([])


def test_unknown_flag_rejected():
    with pytest.raises(UsageError, match="Invalid argument: --bogus"):
        parse_args(["--bogus", "1"])


def test_unknown_argument_in_flag_position_rejected():
    with pytest.raises(UsageError, match="Invalid argument: extra"):
        parse_args(["-p", "8080", "extra"])


@pytest.mark.parametrize("flag", ["-p", "--port"])
def test_port_parsed(flag):
    options = parse_args([flag, "8080"])
    assert options.port == 8080
    assert options.directory == "./"


def test_default_port_when_not_given(tmp_path):
    options = parse_args(["-d", str(tmp_path)])
    assert options.port == 80
    assert options.directory == str(tmp_path)


def test_first_port_wins():
    assert parse_args(["-p", "8080", "--port", "9090"]).port == 8080


def test_port_uses_leading_digits():
    assert parse_args(["-p", "3000abc"]).port == 3000


@pytest.mark.parametrize("value", ["abc", "0", "-d"])
def test_port_not_a_number(value):
    with pytest.raises(UsageError, match="Invalid port number"):
        parse_args(["-p", value])


@pytest.mark.parametrize("value", ["70000", "-5"])
def test_port_out_of_range(value):
    with pytest.raises(UsageError, match="Port number must be between 1 and 65535"):
        parse_args(["-p", value])


def test_missing_port_value():
    with pytest.raises(UsageError, match="Missing value"):
        parse_args(["-p"])


def test_absolute_directory_kept_without_check(tmp_path):
    missing = str(tmp_path / "nowhere")
    options = parse_args(["--directory", missing])
    assert options.directory == missing


def test_relative_directory_made_absolute(tmp_path, monkeypatch):
    (tmp_path / "site").mkdir()
    monkeypatch.chdir(tmp_path)
    options = parse_args(["-d", "site"])
    assert options.directory.endswith("/site")
    assert options.directory.startswith("/")


def test_relative_directory_must_exist(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(UsageError, match="Directory does not exist"):
        parse_args(["-d", "absent"])


def test_help_and_version_flags_recorded():
    assert parse_args(["-h"]) == Options(show_help=True)
    assert parse_args(["--version"]) == Options(show_version=True)


def test_main_without_arguments_prints_help(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert out == format_help()


def test_main_reports_invalid_port(capsys):
    assert main(["-p", "nope"]) == 1
    out = capsys.readouterr().out
    assert out.startswith("Error: Invalid port number: nope\n")
    assert out.endswith(format_help())


def test_main_help(capsys):
    assert main(["--help"]) == 0
    assert capsys.readouterr().out == format_help()


def test_main_version(capsys):
    assert main(["-v"]) == 0
    assert capsys.readouterr().out == "0.0.1\n"