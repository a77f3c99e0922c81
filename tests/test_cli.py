import pytest

from otpkit.client import cli
from otpkit.common.base32 import Base32
from otpkit.common.otp import OtpEngine

RFC_SECRET_BASE32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


@pytest.fixture
def fixed_engine():
    return OtpEngine(clock=lambda: 59)


def test_secret(capsys):
    assert cli.main(["secret"]) == cli.EXIT_OK
    out = capsys.readouterr().out.strip()
    assert len(Base32.decode(out)) == 10


def test_secret_length(capsys):
    assert cli.main(["secret", "--length", "20"]) == cli.EXIT_OK
    assert len(Base32.decode(capsys.readouterr().out.strip())) == 20


def test_code_for_counter(capsys):
    assert cli.main(["code", RFC_SECRET_BASE32, "--counter", "0"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "755224"


def test_code_for_current_step(capsys, fixed_engine):
    assert cli.main(["code", RFC_SECRET_BASE32], engine=fixed_engine) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "287082"


def test_code_is_zero_padded(capsys):
    engine = OtpEngine(clock=lambda: 1234567890)
    assert cli.main(["code", RFC_SECRET_BASE32], engine=engine) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "005924"


def test_verify(capsys, fixed_engine):
    assert cli.main(["verify", RFC_SECRET_BASE32, "287082"], engine=fixed_engine) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "valid"


def test_verify_invalid(capsys, fixed_engine):
    assert cli.main(["verify", RFC_SECRET_BASE32, "000000"], engine=fixed_engine) == cli.EXIT_INVALID
    assert capsys.readouterr().out.strip() == "invalid"


def test_verify_writes_audit_log(tmp_path, fixed_engine):
    log_file = tmp_path / "audit.log"
    argv = ["--audit-log", str(log_file), "verify", RFC_SECRET_BASE32, "287082", "--modifier", "alice"]
    assert cli.main(argv, engine=fixed_engine) == cli.EXIT_OK
    assert "Subject: alice, Action: validate_code succeeded" in log_file.read_text()


def test_verify_bad_code(capsys, fixed_engine):
    assert cli.main(["verify", RFC_SECRET_BASE32, "12ab56"], engine=fixed_engine) == cli.EXIT_ERROR
    assert "Error:" in capsys.readouterr().err


def test_bad_secret(capsys):
    assert cli.main(["code", "NOT-BASE32", "--counter", "0"]) == cli.EXIT_ERROR
    assert "Invalid Base32 character" in capsys.readouterr().err


def test_encode_decode(capsys):
    assert cli.main(["encode", "foobar"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "MZXW6YTBOI======"

    assert cli.main(["decode", "mzxw6ytboi"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "foobar"


def test_requires_command():
    with pytest.raises(SystemExit):
        cli.main([])
