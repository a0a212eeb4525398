import logging
from functools import lru_cache

import environ
import hvac

log = logging.getLogger(__name__)

env = environ.Env()

BASE_DIR = environ.Path(__file__) - 2


# OpenBao: secrets (wallet key, DB password, ...) live under one KV v2 path
OPENBAO_ADDR = env("OPENBAO_ADDR", default="http://127.0.0.1:8200")
# Token en dev, AppRole en prod
OPENBAO_TOKEN = env("OPENBAO_TOKEN", default="")
OPENBAO_ROLE_ID = env("OPENBAO_ROLE_ID", default="")
OPENBAO_SECRET_ID = env("OPENBAO_SECRET_ID", default="")
OPENBAO_KV_MOUNT = env("OPENBAO_KV_MOUNT", default="secret")
OPENBAO_KV_PATH = env("OPENBAO_KV_PATH", default="certificates")  # e.g. "certificates/prod" if you split per env
# Without credentials there is nothing to read; skip the network round-trip
OPENBAO_ENABLED = env.bool("OPENBAO_ENABLED", default=bool(OPENBAO_TOKEN or (OPENBAO_ROLE_ID and OPENBAO_SECRET_ID)))


def _bao_client() -> hvac.Client:
    return hvac.Client(url=OPENBAO_ADDR, timeout=5)


def _bao_auth(c: hvac.Client) -> None:
    if OPENBAO_TOKEN:
        c.token = OPENBAO_TOKEN
        return
    if OPENBAO_ROLE_ID and OPENBAO_SECRET_ID:
        resp = c.auth.approle.login(role_id=OPENBAO_ROLE_ID, secret_id=OPENBAO_SECRET_ID)
        c.token = resp["auth"]["client_token"]


@lru_cache(maxsize=32)
def bao_read_kv(path=None) -> dict:
    """
    KV v2 secrets at {OPENBAO_KV_MOUNT}/{path or OPENBAO_KV_PATH}.
    Read once per process.
    """
    c = _bao_client()
    _bao_auth(c)
    resp = c.secrets.kv.v2.read_secret_version(mount_point=OPENBAO_KV_MOUNT, path=path or OPENBAO_KV_PATH)
    return resp["data"]["data"] or {}


def env_get(name: str, default=None, *, kv_path=None, prefer_env: bool = True):
    """
    Environment (.env included) first, then OpenBao, then `default`.
    OpenBao failures are logged and fall back to `default`.
    """
    if prefer_env:
        val = env(name, default=None)
        if val is not None:
            return val
    if not OPENBAO_ENABLED:
        return default
    try:
        data = bao_read_kv(kv_path)
    except Exception as e:
        log.warning("env_get: OpenBao read failed for %s: %s (using default)", name, e)
        return default
    return data.get(name, default)
