"""
Browser facade: a blocking convenience layer over ``Session``.

``chrome()`` and ``firefox()`` start a local driver on a free port and open a
session against it; ``remote()`` connects to an already running endpoint.
"""

from __future__ import annotations

import io
import threading
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import Any

from PIL import Image

from webdriver.capabilities import Capabilities
from webdriver.config import ClientConfig, DriverConfig
from webdriver.driver.chromedriver import ChromeDriver, ChromeDriverArgs, ChromeLogLevel
from webdriver.driver.geckodriver import GeckoDriver, GeckoDriverArgs, GeckoLogLevel
from webdriver.driver.ports import free_port
from webdriver.driver.process import DriverProcess
from webdriver.elements import By, WebElement
from webdriver.errors import InvalidArgumentsError, UnknownWindowHandlerError, WebDriverError
from webdriver.httpclient import HttpClient
from webdriver.logger import WebDriverLogger, get_logger
from webdriver.models import Cookie, Rect, Status, Timeout, WindowType
from webdriver.options import BrowserOptions, ChromeOptions, FirefoxOptions
from webdriver.session import Session
from webdriver.transport import HttpTransport

CHROME_DRIVER_LOG = "~/chrome-driver.log"
DRIVER_START_TIMEOUT = 30.0
DRIVER_STOP_TIMEOUT = 10.0


class Browser:
    """
    Blocking browser handle.

    Args:
        session: Open session created over ``HttpTransport``
        driver: Local driver owned by this browser, stopped on ``close``
        driver_thread: Thread running ``driver.run``, joined on ``close``
        logger: Optional logger

    Example:
        >>> with chrome(ChromeOptions().add_argument("--headless")) as browser:
        ...     browser.navigate_to("https://example.com")
        ...     print(browser.title())
    """

    def __init__(
        self,
        session: Session,
        driver: DriverProcess | None = None,
        logger: WebDriverLogger | None = None,
        driver_thread: threading.Thread | None = None,
    ):
        self.session = session
        self.driver = driver
        self.driver_thread = driver_thread
        self.logger = logger or get_logger("browser")

    def uid(self) -> str:
        return self.session.id

    # Scripts and document

    def execute(self, script: str, args: list[Any] | None = None) -> str:
        return self.session.document.execute_script(script, args)

    def execute_async(self, script: str, args: list[Any] | None = None) -> str:
        return self.session.document.execute_async_script(script, args)

    def source(self) -> str:
        return self.session.document.get_page_source()

    # Cookies

    def cookies(self) -> list[Cookie]:
        return self.session.cookies.all()

    def get_cookie(self, name: str) -> Cookie:
        return self.session.cookies.get(name)

    def add_cookie(self, cookie: Cookie | dict[str, Any]) -> None:
        self.session.cookies.add(cookie)

    def delete_cookie(self, name: str) -> None:
        self.session.cookies.delete(name)

    def delete_cookies(self) -> None:
        self.session.cookies.delete_all()

    # Navigation

    def navigate_to(self, url: str) -> None:
        self.session.navigation.navigate_to(url)

    url = navigate_to

    def current_url(self) -> str:
        return self.session.navigation.get_current_url()

    def back(self) -> None:
        self.session.navigation.back()

    def forward(self) -> None:
        self.session.navigation.forward()

    def refresh(self) -> None:
        self.session.navigation.refresh()

    def title(self) -> str:
        return self.session.navigation.get_title()

    # Timeouts

    def get_timeout(self) -> Timeout:
        return self.session.timeouts.get()

    def set_implicit_timeout(self, duration: timedelta | float) -> None:
        self.session.timeouts.set_implicit(duration)

    def set_page_load_timeout(self, duration: timedelta | float) -> None:
        self.session.timeouts.set_page_load(duration)

    def set_script_timeout(self, duration: timedelta | float) -> None:
        self.session.timeouts.set_script(duration)

    # Session

    def capabilities(self) -> Capabilities:
        return self.session.capabilities()

    def status(self) -> Status:
        return self.session.status()

    # Elements

    def find_element_by_id(self, element_id: str) -> WebElement:
        """Find an element by DOM id using a css selector (``#`` is added when missing)."""
        if not element_id:
            raise InvalidArgumentsError("empty element id")
        if not element_id.startswith("#"):
            element_id = "#" + element_id
        return self.session.elements.find_one(By.CSS_SELECTOR, element_id)

    def find_element_by_xpath(self, xpath: str) -> WebElement:
        return self.session.elements.find_one(By.XPATH, xpath)

    def find_element_by_link_text(self, text: str) -> WebElement:
        return self.session.elements.find_one(By.LINK_TEXT, text)

    # Windows and frames

    def windows(self) -> list[str]:
        return self.session.context.get_window_handles()

    def active_window(self) -> str:
        return self.session.context.get_window_handle()

    def close_active_window(self) -> None:
        self.session.context.close_window()

    def close_window(self, handle: str) -> None:
        """Switch to ``handle`` and close it. An empty handle is ignored."""
        if not handle:
            return
        self.switch_to(handle)
        self.close_active_window()

    def open_tab(self) -> str:
        return self.session.context.new_window(WindowType.TAB).handle

    def open_window(self) -> str:
        return self.session.context.new_window(WindowType.WINDOW).handle

    def switch_to(self, handle: str) -> None:
        if not handle:
            raise UnknownWindowHandlerError()
        self.session.context.switch_to_window(handle)

    def switch_to_frame(self, frame: Any) -> None:
        self.session.context.switch_to_frame(frame)

    def switch_to_parent_frame(self) -> None:
        self.session.context.switch_to_parent_frame()

    def resize_window(self, rect: Rect) -> Rect:
        return self.session.context.set_rect(rect)

    def move_to(self, x: int, y: int) -> None:
        rect = self.session.context.get_rect()
        self.session.context.set_rect(rect.model_copy(update={"x": x, "y": y}))

    def resize_to(self, width: int, height: int) -> None:
        rect = self.session.context.get_rect()
        self.session.context.set_rect(rect.model_copy(update={"width": width, "height": height}))

    def screen_size(self) -> tuple[int, int]:
        rect = self.session.context.get_rect()
        return rect.width, rect.height

    def screen_position(self) -> tuple[int, int]:
        rect = self.session.context.get_rect()
        return rect.x, rect.y

    def maximize(self) -> None:
        self.session.context.maximize()

    def minimize(self) -> None:
        self.session.context.minimize()

    def fullscreen(self) -> None:
        self.session.context.fullscreen()

    # Screenshots

    def screenshot(self) -> io.BufferedReader:
        return self.session.screen_capture.take()

    def element_screenshot(self, element_id: str) -> io.BufferedReader:
        return self.session.screen_capture.take_element(element_id)

    def screenshot_image(self) -> Image.Image:
        """Take a screenshot and decode it in whatever format the remote end sent."""
        return _decode_image(self.screenshot())

    def screenshot_png(self) -> Image.Image:
        return _decode_image(self.screenshot(), "PNG")

    def screenshot_jpg(self) -> Image.Image:
        """Take a screenshot and decode it as JPEG. Fails for remote ends that send PNG."""
        return _decode_image(self.screenshot(), "JPEG")

    # Lifecycle

    def close(self) -> None:
        """Delete the session, then stop the owned driver (if any) and wait for it to exit."""
        try:
            self.session.delete()
        finally:
            if self.driver is not None:
                _stop_driver(self.driver, self.driver_thread, self.logger)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _decode_image(stream: io.BufferedReader, fmt: str | None = None) -> Image.Image:
    image = Image.open(io.BytesIO(stream.read()), formats=[fmt] if fmt else None)
    image.load()
    return image


def _new_transport(addr: str, config: ClientConfig | None) -> HttpTransport:
    config = config or ClientConfig.from_env()
    backoff = config.backoff
    client = HttpClient(
        addr,
        timeout=config.timeout,
        retry_count=config.retry_count,
        backoff=lambda attempt, response: backoff,
    )
    return HttpTransport(client)


def remote(
    addr: str, options: BrowserOptions, config: ClientConfig | None = None
) -> Browser:
    """Open a session on an already running remote end at ``addr``."""
    session = Session.create(_new_transport(addr, config), options)
    return Browser(session)


def _stop_driver(
    driver: DriverProcess, thread: threading.Thread | None, logger: WebDriverLogger
) -> None:
    driver.stop()
    if thread is None:
        return
    thread.join(DRIVER_STOP_TIMEOUT)
    if thread.is_alive():
        logger.warning(f"driver did not exit within {DRIVER_STOP_TIMEOUT}s")


def _start_driver(
    factory: Callable[[Callable[[int], None]], DriverProcess],
    timeout: float,
    logger: WebDriverLogger,
) -> tuple[DriverProcess, threading.Thread]:
    """Run a driver in a daemon thread and wait until its run hook fires."""
    ready = threading.Event()
    failures: list[BaseException] = []
    driver = factory(lambda pid: ready.set())

    def target() -> None:
        try:
            driver.run()
        except Exception as e:
            failures.append(e)
            logger.error(f"driver failed: {e}")
        finally:
            ready.set()

    thread = threading.Thread(target=target, name="webdriver-driver", daemon=True)
    thread.start()
    if not ready.wait(timeout):
        _stop_driver(driver, thread, logger)
        raise TimeoutError(f"driver did not start within {timeout}s")
    if failures:
        raise failures[0]
    if not driver.running:
        raise WebDriverError("driver exited during startup")
    return driver, thread


def _open(
    driver: DriverProcess,
    thread: threading.Thread,
    port: int,
    options: BrowserOptions,
    config: ClientConfig | None,
    logger: WebDriverLogger,
) -> Browser:
    try:
        session = Session.create(_new_transport(f"http://localhost:{port}", config), options)
    except BaseException:
        _stop_driver(driver, thread, logger)
        raise
    return Browser(session, driver=driver, logger=logger, driver_thread=thread)


def chrome(
    options: ChromeOptions | None = None,
    config: ClientConfig | None = None,
    driver_config: DriverConfig | None = None,
    logger: WebDriverLogger | None = None,
    startup_timeout: float = DRIVER_START_TIMEOUT,
) -> Browser:
    """
    Start chromedriver on a free port and open a Chrome session.

    The driver binary comes from ``CHROMEDRIVER_PATH`` or ``chromedriver`` on PATH;
    its log goes to ``~/chrome-driver.log``.
    """
    options = options or ChromeOptions()
    driver_config = driver_config or DriverConfig.from_env()
    logger = logger or get_logger("browser")
    port = free_port()
    args = ChromeDriverArgs(
        port=port,
        whitelisted_ips=["0.0.0.0"],
        log_path=str(Path(CHROME_DRIVER_LOG).expanduser()),
        log_level=ChromeLogLevel.SEVERE,
    )
    driver, thread = _start_driver(
        lambda hook: ChromeDriver(
            args, binary=driver_config.chromedriver_path, run_hook=hook, logger=logger
        ),
        startup_timeout,
        logger,
    )
    return _open(driver, thread, port, options.build(), config, logger)


def firefox(
    options: FirefoxOptions | None = None,
    config: ClientConfig | None = None,
    driver_config: DriverConfig | None = None,
    logger: WebDriverLogger | None = None,
    startup_timeout: float = DRIVER_START_TIMEOUT,
) -> Browser:
    """Start geckodriver on a free port and open a Firefox session."""
    options = options or FirefoxOptions()
    driver_config = driver_config or DriverConfig.from_env()
    logger = logger or get_logger("browser")
    port = free_port()
    args = GeckoDriverArgs(port=port, log_level=GeckoLogLevel.ERROR)
    driver, thread = _start_driver(
        lambda hook: GeckoDriver(
            args, binary=driver_config.geckodriver_path, run_hook=hook, logger=logger
        ),
        startup_timeout,
        logger,
    )
    return _open(driver, thread, port, options.build(), config, logger)
