"""
Local driver processes.
"""

from webdriver.driver.chromedriver import ChromeDriver, ChromeDriverArgs, ChromeLogLevel
from webdriver.driver.geckodriver import GeckoDriver, GeckoDriverArgs, GeckoLogLevel
from webdriver.driver.ports import free_port, validate_port
from webdriver.driver.process import (
    DriverAlreadyRunningError,
    DriverExitError,
    DriverNotFoundError,
    DriverProcess,
)

__all__ = [
    "ChromeDriver",
    "ChromeDriverArgs",
    "ChromeLogLevel",
    "DriverAlreadyRunningError",
    "DriverExitError",
    "DriverNotFoundError",
    "DriverProcess",
    "GeckoDriver",
    "GeckoDriverArgs",
    "GeckoLogLevel",
    "free_port",
    "validate_port",
]
