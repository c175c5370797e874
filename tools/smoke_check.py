from __future__ import annotations

import argparse
import os
import sys
import tomllib
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigError, load_app_config  # noqa: E402
from services.api_client import ApiError, SpeechTrackerClient  # noqa: E402


def _print_status(ok: bool, message: str) -> None:
    prefix = "OK" if ok else "FAIL"
    print(f"[{prefix}] {message}")


def _load_secrets(secrets_path: Path) -> dict[str, Any]:
    if not secrets_path.exists():
        return {}
    with secrets_path.open("rb") as file:
        data = tomllib.load(file)
    if not isinstance(data, dict):
        raise ValueError("Secrets file is not a valid TOML mapping.")
    return data


def _backend_check(client: SpeechTrackerClient) -> bool:
    """The backend answers /api/auth/me; a 401 still proves it is reachable."""
    try:
        client.get_current_user()
    except ApiError as exc:
        if exc.kind == "response" and exc.status_code == 401:
            _print_status(True, f"Backend reachable at {client.base_url}")
            return True
        _print_status(False, f"Backend check failed: {exc}")
        return False
    _print_status(True, f"Backend reachable at {client.base_url} (session active)")
    return True


def _login_check(client: SpeechTrackerClient, username: str, password: str) -> bool:
    try:
        payload = client.login(username, password)
    except ApiError as exc:
        _print_status(False, f"Login failed: {exc.user_message(str(exc))}")
        return False
    user_id = payload.get("userId") if isinstance(payload, dict) else None
    _print_status(True, f"Login as '{username}' succeeded (userId={user_id})")
    return True


def _sheets_check(client: SpeechTrackerClient) -> bool:
    try:
        result = client.test_connection()
    except ApiError as exc:
        _print_status(False, f"Sheets connection failed: {exc.user_message(str(exc))}")
        return False
    first_line = str(result or "").splitlines()[0] if result else ""
    _print_status(True, f"Sheets connection OK {first_line}".rstrip())
    return True


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Smoke-check the speech tracker backend used by the app."
    )
    parser.add_argument(
        "--secrets",
        default=".streamlit/secrets.toml",
        help="Path to Streamlit secrets.toml (optional)",
    )
    parser.add_argument("--username", default=os.getenv("SMOKE_USERNAME"))
    parser.add_argument("--password", default=os.getenv("SMOKE_PASSWORD"))
    parser.add_argument(
        "--sheets",
        action="store_true",
        help="Also run the admin Google Sheets connection test (needs login)",
    )
    args = parser.parse_args()

    try:
        app_config = load_app_config(_load_secrets(Path(args.secrets)))
    except (ConfigError, ValueError, tomllib.TOMLDecodeError) as exc:
        _print_status(False, f"Configuration invalid: {exc}")
        return 1
    _print_status(True, f"Configuration loaded (api.base_url={app_config.api.base_url})")

    with SpeechTrackerClient(
        app_config.api.base_url, timeout_seconds=app_config.api.timeout_seconds
    ) as client:
        ok = _backend_check(client)
        if ok and args.username and args.password:
            ok = _login_check(client, args.username, args.password)
            if ok and args.sheets:
                ok = _sheets_check(client)
        elif args.sheets:
            _print_status(False, "--sheets requires --username and --password")
            ok = False

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
