import pytest

from peerswap import log


class RecordingLogger:
    def __init__(self):
        self.records = []

    def infof(self, fmt, *args):
        self.records.append(("info", fmt, args))

    def debugf(self, fmt, *args):
        self.records.append(("debug", fmt, args))


@pytest.fixture(autouse=True)
def reset_logger():
    log.set_logger(None)
    yield
    log.set_logger(None)


def test_debugf_default_with_extra_argument(capsys):
    log.debugf("gude \n", None)
    err = capsys.readouterr().err
    assert "[DEBUG] gude" in err
    assert "None" in err


def test_infof_default_formats_arguments(capsys):
    log.infof("swap %s amount %d", "abc", 5)
    err = capsys.readouterr().err
    assert "[INFO] swap abc amount 5" in err
    assert err.endswith("\n")


def test_custom_logger_receives_calls(capsys):
    recorder = RecordingLogger()
    log.set_logger(recorder)
    log.infof("hello %s", "world")
    log.debugf("dbg %d", 3)
    assert recorder.records == [
        ("info", "hello %s", ("world",)),
        ("debug", "dbg %d", (3,)),
    ]
    assert capsys.readouterr().err == ""


def test_reset_logger_restores_default(capsys):
    recorder = RecordingLogger()
    log.set_logger(recorder)
    log.set_logger(None)
    log.infof("back")
    assert recorder.records == []
    assert "[INFO] back" in capsys.readouterr().err