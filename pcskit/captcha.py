"""Location of the downloaded captcha image."""

import os
import tempfile

CAPTCHA_NAME = "captcha.png"


def captcha_path():
    """Path where the captcha image is stored, in the temporary directory."""
    return os.path.join(tempfile.gettempdir(), CAPTCHA_NAME)


def remove_captcha_path():
    """Remove the captcha image; raises FileNotFoundError if absent."""
    os.remove(captcha_path())


def remove_old_captcha_path(config_dir):
    """Remove a captcha image left in the configuration directory."""
    os.remove(os.path.join(config_dir, CAPTCHA_NAME))