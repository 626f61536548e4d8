import os

from kc_api.config import get_settings


def get_storage_dir() -> str:
    return get_settings().storage_dir


def storage_path(storage_dir: str, filename: str) -> str:
    # The client filename is the storage key as-is, no normalisation.
    return os.path.join(storage_dir, filename)


def save_upload(path: str, data: bytes) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as out:
        out.write(data)


def exists(path) -> bool:
    return bool(path) and os.path.exists(path)


def remove_stored(path) -> None:
    if not path:
        return
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
