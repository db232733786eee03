from __future__ import annotations

import logging
import os
import ssl
import subprocess
import urllib.request
from typing import Optional

from .exceptions import ModelAssetError

logger = logging.getLogger(__name__)


HAND_LANDMARKER_TASK_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
)


def _remove_partial(path: str) -> None:
    try:
        if os.path.exists(path):
            os.remove(path)
    except OSError:
        logger.warning("Could not remove partial download %s", path)


def _ssl_context() -> ssl.SSLContext:
    # python.org macOS builds often lack root certificates; certifi fixes that when installed.
    try:
        import certifi  # type: ignore

        return ssl.create_default_context(cafile=certifi.where())
    except ImportError:
        return ssl.create_default_context()


def _download_with_urllib(url: str, model_path: str, timeout_s: int) -> None:
    with urllib.request.urlopen(url, context=_ssl_context(), timeout=timeout_s) as r, open(model_path, "wb") as f:
        f.write(r.read())


def _download_with_curl(url: str, model_path: str) -> Optional[subprocess.CompletedProcess]:
    try:
        proc = subprocess.run(
            ["curl", "-L", "-o", model_path, url],
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError:
        logger.debug("curl is not available")
        return None
    return proc


def ensure_hand_landmarker_task(model_path: str, *, url: str = HAND_LANDMARKER_TASK_URL, timeout_s: int = 30) -> str:
    """
    Ensure `hand_landmarker.task` exists at `model_path`.

    If missing, downloads it from the official MediaPipe model bucket, first with
    urllib and then with `curl`. Raises `ModelAssetError` if both fail.
    """

    if os.path.exists(model_path):
        return model_path

    os.makedirs(os.path.dirname(model_path) or ".", exist_ok=True)
    logger.info("Downloading hand landmarker model to %s", model_path)

    try:
        _download_with_urllib(url, model_path, timeout_s)
        return model_path
    except OSError as e:
        logger.warning("Python download failed (%s), retrying with curl", e)
        first_error = e
        _remove_partial(model_path)

    proc = _download_with_curl(url, model_path)
    if proc is not None and proc.returncode == 0 and os.path.exists(model_path) and os.path.getsize(model_path) > 0:
        return model_path
    _remove_partial(model_path)

    curl_err = ""
    if proc is not None:
        curl_err = f"\n\ncurl stderr:\n{proc.stderr.strip()}\n"

    raise ModelAssetError(
        "Missing MediaPipe Tasks model file and auto-download failed.\n\n"
        f"Expected model at: {model_path}\n"
        f"URL: {url}\n\n"
        "Download it manually:\n"
        f'  mkdir -p "{os.path.dirname(model_path) or "."}"\n'
        f'  curl -L -o "{model_path}" "{url}"\n'
        "On macOS python.org builds, CERTIFICATE_VERIFY_FAILED usually means the bundled\n"
        "'Install Certificates.command' has not been run."
        f"{curl_err}"
    ) from first_error
