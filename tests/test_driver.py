"""Tests for webdriver.driver package"""

import io
import signal
import subprocess
from unittest.mock import MagicMock, Mock, patch

import pytest

from webdriver.driver import (
    ChromeDriver,
    ChromeDriverArgs,
    ChromeLogLevel,
    DriverAlreadyRunningError,
    DriverExitError,
    DriverNotFoundError,
    DriverProcess,
    GeckoDriverArgs,
    free_port,
    validate_port,
)
from webdriver.driver.process import _pump


@pytest.fixture
def which():
    with patch("webdriver.driver.process.shutil.which") as mock_which:
        mock_which.side_effect = lambda name: f"/usr/local/bin/{name}"
        yield mock_which


def fake_popen(returncode=0, pid=4242):
    proc = MagicMock()
    proc.pid = pid
    proc.wait.return_value = returncode
    return proc


class TestPorts:
    """Test port helpers."""

    @pytest.mark.parametrize("port", [1, 9515, 65534])
    def test_valid_ports(self, port):
        assert validate_port(port) == port

    @pytest.mark.parametrize("port", [0, -1, 65535, 70000, True, "9515"])
    def test_invalid_ports(self, port):
        with pytest.raises(ValueError, match="out of range port"):
            validate_port(port)

    def test_free_port(self):
        port = free_port()
        assert 0 < port < 65536


class TestChromeDriverArgs:
    """Test chromedriver command line."""

    def test_build_order(self, tmp_path):
        log_path = tmp_path / "chrome-driver.log"
        args = ChromeDriverArgs(
            port=9515,
            adb_port=5037,
            log_level="SEVERE",
            log_path=str(log_path),
            base_url="/wd/hub",
            whitelisted_ips=["0.0.0.0", "10.0.0.1"],
            append_log=True,
            verbose=True,
        )
        assert args.build() == [
            "--port=9515",
            "--adb-port=5037",
            "--log-level=SEVERE",
            f"--log-path={log_path}",
            "--url-base=/wd/hub",
            "--whitelisted-ips=0.0.0.0,10.0.0.1",
            "--append-log",
            "--verbose",
        ]
        assert log_path.exists()

    def test_minimal(self):
        assert ChromeDriverArgs(port=9515).build() == ["--port=9515"]

    def test_bad_port(self):
        with pytest.raises(ValueError):
            ChromeDriverArgs(port=0)

    def test_bad_adb_port(self):
        with pytest.raises(ValueError):
            ChromeDriverArgs(port=9515, adb_port=65535)

    def test_bad_log_level(self):
        with pytest.raises(ValueError, match="unknown log level"):
            ChromeDriverArgs(port=9515, log_level="LOUD")

    def test_log_level_enum(self):
        args = ChromeDriverArgs(port=9515, log_level=ChromeLogLevel.OFF)
        assert "--log-level=OFF" in args.build()

    def test_chrome_driver(self, which):
        driver = ChromeDriver(ChromeDriverArgs(port=9515, silent=True))
        assert driver.binary == "/usr/local/bin/chromedriver"
        assert driver.args == ["--port=9515", "--silent"]
        assert driver.port == 9515
        assert not driver.running


class TestGeckoDriverArgs:
    """Test geckodriver command line."""

    def test_build_order(self, which):
        args = GeckoDriverArgs(
            port=4444,
            host="127.0.0.1",
            marionette_port=2828,
            binary="firefox",
            log_level="debug",
            connect_existing=True,
            verbose=True,
        )
        assert args.build() == [
            "--port=4444",
            "--host=127.0.0.1",
            "--marionette-port=2828",
            "--binary=/usr/local/bin/firefox",
            "--log=debug",
            "--connect-existing",
            "-v",
        ]

    def test_missing_firefox(self):
        with patch("webdriver.driver.process.shutil.which", return_value=None):
            with pytest.raises(DriverNotFoundError):
                GeckoDriverArgs(port=4444, binary="firefox")

    def test_bad_marionette_port(self):
        with pytest.raises(ValueError):
            GeckoDriverArgs(port=4444, marionette_port=-2)


class TestDriverProcess:
    """Test the driver supervisor."""

    def test_binary_not_found(self):
        with patch("webdriver.driver.process.shutil.which", return_value=None):
            with pytest.raises(DriverNotFoundError) as exc_info:
                DriverProcess("chromedriver")
        assert exc_info.value.binary == "chromedriver"
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_run_clean_exit(self, which):
        stop_hook = Mock()
        proc = fake_popen(returncode=0)

        driver = DriverProcess("chromedriver", ["--port=9515"], stop_hook=stop_hook)
        with patch("webdriver.driver.process.subprocess.Popen", return_value=proc) as popen:
            driver.run()

        argv = popen.call_args[0][0]
        assert argv == ["/usr/local/bin/chromedriver", "--port=9515"]
        stop_hook.assert_called_once_with(4242)
        assert not driver.running

    def test_run_failure(self, which):
        driver = DriverProcess("chromedriver")
        with patch("webdriver.driver.process.subprocess.Popen", return_value=fake_popen(1)):
            with pytest.raises(DriverExitError) as exc_info:
                driver.run()
        assert exc_info.value.returncode == 1

    def test_stop_while_running(self, which):
        proc = fake_popen()
        driver = DriverProcess("chromedriver")

        def wait():
            assert driver.running
            assert driver.pid == 4242
            driver.stop()
            return 1

        proc.wait.side_effect = wait
        with patch("webdriver.driver.process.subprocess.Popen", return_value=proc):
            with patch("webdriver.driver.process.os.name", "posix"):
                driver.run()

        proc.send_signal.assert_called_once_with(signal.SIGINT)

    def test_stop_on_windows_terminates(self, which):
        proc = fake_popen()
        driver = DriverProcess("chromedriver")

        def wait():
            driver.stop()
            return 1

        proc.wait.side_effect = wait
        with patch("webdriver.driver.process.subprocess.Popen", return_value=proc):
            with patch("webdriver.driver.process.os.name", "nt"):
                driver.run()

        proc.terminate.assert_called_once()

    def test_stop_without_process(self, which):
        driver = DriverProcess("chromedriver")
        driver.stop()
        driver.stop()
        assert not driver.running

    def test_run_twice(self, which):
        proc = fake_popen()
        driver = DriverProcess("chromedriver")
        errors = []

        def wait():
            try:
                driver.run()
            except DriverAlreadyRunningError as e:
                errors.append(e)
            return 0

        proc.wait.side_effect = wait
        with patch("webdriver.driver.process.subprocess.Popen", return_value=proc):
            driver.run()

        assert len(errors) == 1
        assert errors[0].pid == 4242

    def test_cancel_kills_child(self, which):
        proc = fake_popen()
        proc.wait.side_effect = [subprocess.TimeoutExpired("chromedriver", 0.1), -9]
        cancel = MagicMock()
        cancel.is_set.return_value = True

        driver = DriverProcess("chromedriver")
        with patch("webdriver.driver.process.subprocess.Popen", return_value=proc):
            driver.run(cancel=cancel)

        proc.kill.assert_called_once()

    def test_pump_decodes_for_text_sinks(self):
        sink = io.StringIO()
        _pump(io.BytesIO(b"Starting ChromeDriver\n"), sink)
        assert sink.getvalue() == "Starting ChromeDriver\n"

    def test_pump_keeps_characters_split_across_reads(self):
        data = ("a" * 4095 + "\u00e9 done\n").encode("utf-8")
        sink = io.StringIO()
        _pump(io.BytesIO(data), sink)
        assert sink.getvalue() == "a" * 4095 + "\u00e9 done\n"

    def test_pump_flushes_truncated_tail(self):
        sink = io.StringIO()
        _pump(io.BytesIO(b"ok \xc3"), sink)
        assert sink.getvalue() == "ok \ufffd"

    def test_pump_binary_sink(self):
        sink = io.BytesIO()
        _pump(io.BytesIO(b"\x00\x01"), sink)
        assert sink.getvalue() == b"\x00\x01"
