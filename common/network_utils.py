# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import requests

module_logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 8192


def partial_download_path(destination: Path) -> Path:
    return destination.with_name(destination.name + ".part")


def download_file(
    url: str,
    destination: Union[str, Path],
    timeout: Optional[float] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Download ``url`` to ``destination``.

    Redirects are followed and any HTTP error status counts as a failure.
    The body is streamed into ``<destination>.part`` which is renamed onto
    ``destination`` only once the transfer has completed, so a failed
    download never leaves a file at ``destination``.

    Args:
        url: The URL to fetch.
        destination: File path to write.
        timeout: Seconds to wait for the server; None waits indefinitely.
        current_logger: Logger to use instead of the module logger.

    Returns:
        True if the download was successful, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    download_path = Path(destination)
    part_path = partial_download_path(download_path)
    response: Optional[requests.Response] = None

    logger_to_use.info(f"Downloading {url} -> {download_path}")
    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        response = requests.get(
            url, stream=True, timeout=timeout, allow_redirects=True
        )
        response.raise_for_status()

        with open(part_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
        os.replace(part_path, download_path)
        logger_to_use.info(f"Download successful: {download_path}")
        return True
    except requests.exceptions.HTTPError as http_err:
        status_code = (
            response.status_code if response is not None else "Unknown"
        )
        logger_to_use.warning(
            f"HTTP error occurred: {http_err} - Status code: {status_code}"
        )
    except requests.exceptions.ConnectionError as conn_err:
        logger_to_use.warning(f"Connection error occurred: {conn_err}")
    except requests.exceptions.Timeout as timeout_err:
        logger_to_use.warning(f"Timeout error occurred: {timeout_err}")
    except requests.exceptions.RequestException as req_err:
        logger_to_use.warning(
            f"An unexpected error occurred during download: {req_err}"
        )
    except OSError as io_err:
        logger_to_use.warning(f"File I/O error when saving download: {io_err}")
    finally:
        if response is not None:
            response.close()

    if part_path.exists():
        part_path.unlink()
    return False
