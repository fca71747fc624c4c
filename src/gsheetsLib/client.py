import os.path
import time
import json
import logging
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Any, Optional, TYPE_CHECKING
from dotenv import load_dotenv
from .config import (TOKEN_PATH, CRED_PATH, SCOPES, TOKEN_ENV_VAR, CREDS_ENV_VAR,
                     MAX_RETRIES, RETRY_STATUS_CODES, THROTTLE_STATUS_CODES)
from .models import TransportError

if TYPE_CHECKING:
    from googleapiclient._apis.sheets.v4 import SheetsResource # type: ignore

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

load_dotenv()

class ClientWrapper:
    """
    Handles authentication and request execution against the Sheets API.

    Credentials are looked up in this order: the GOOGLE_SERVICE_TOKEN environment
    variable, the token file, and finally an OAuth login using GOOGLE_SERVICE_CREDS
    or the credentials file. A `.env` file is honored.

    Args:
        credentials_path (str, optional): OAuth client JSON. Defaults to auth/cred.json.
        token_path (str, optional): Where the access token is read and saved. Defaults to auth/token.json.
        scopes (list[str], optional): API scopes. Defaults to SCOPES.
        service (SheetsResource, optional): An already-built service. Skips authentication entirely.
        max_retries (int, optional): Attempts per request for retryable HTTP statuses.
            A request is always attempted at least once.
    """
    def __init__(self,
                 credentials_path: str = CRED_PATH,
                 token_path: str = TOKEN_PATH,
                 scopes: list = SCOPES,
                 service: Optional["SheetsResource"] = None,
                 max_retries: int = MAX_RETRIES):

        self.credentials_path = credentials_path
        self.token_path = token_path
        self.scopes = scopes
        self.max_retries = max_retries
        self.creds = None
        self.auth_folder = os.path.dirname(token_path)

        self.token_dict = self._load_env_json(TOKEN_ENV_VAR)
        self.creds_dict = self._load_env_json(CREDS_ENV_VAR)

        if service is not None:
            self.service = service
        else:
            self.service = self._authenticate()

    @staticmethod
    def _load_env_json(var_name: str) -> Optional[dict]:
        raw = os.getenv(var_name)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f'Ignoring {var_name}: not valid JSON ({e}).')
            return None

    def _authenticate(self) -> "SheetsResource":
        if self.token_dict:
            self.creds = Credentials.from_authorized_user_info(self.token_dict, self.scopes)
        elif os.path.exists(self.token_path):
            self.creds = Credentials.from_authorized_user_file(self.token_path, self.scopes)

        if not self.creds or not self.creds.valid:
            self._refresh_or_login()

        return build('sheets', 'v4', credentials=self.creds)

    def _refresh_or_login(self):
        """Refreshes the token when possible, otherwise opens the browser login."""
        if self.creds and self.creds.expired and self.creds.refresh_token:
            self.creds.refresh(Request())
            return
        if self.creds_dict:
            flow = InstalledAppFlow.from_client_config(self.creds_dict, self.scopes)
        else:
            flow = InstalledAppFlow.from_client_secrets_file(self.credentials_path, self.scopes)
        self.creds = flow.run_local_server(port=0)
        if self.token_path:
            self._save_token()

    def _save_token(self):
        try:
            if self.auth_folder:
                os.makedirs(self.auth_folder, exist_ok=True)
            with open(self.token_path, 'w') as token:
                token.write(self.creds.to_json()) # type: ignore
        except OSError as e:
            logger.warning(f'Could not save token to {self.token_path}: {e}.')

    def _ensure_valid_auth(self):
        """Renews the credentials before a request if they have expired."""
        if not self.creds or self.creds.valid:
            return
        if self.creds.expired and self.creds.refresh_token:
            logger.info('Expired token detected. Refreshing credentials...')
            self._refresh_or_login()

    def execute(self,
                request,
                function_name: Optional[str] = None,
                details: Any = None,
                idempotent: bool = True) -> Any:
        """
        Executes a request built from `service`, with pre-flight auth check and retry.

        The request is always sent at least once. Retryable statuses are retried with
        exponential backoff; anything else is raised right away.

        A 5xx reply does not say whether the backend applied the change, so 5xx
        statuses are only retried for idempotent requests (reads, updates, clears).
        Appends and batchUpdates pass `idempotent=False` and are retried on 429 only,
        which is rejected before anything is written.

        Args:
            request (HttpRequest): The request object returned by the discovery resource.
            function_name (str, optional): Library method issuing the request, attached to errors.
            details (Any, optional): Request information attached to errors.
            idempotent (bool, optional): Whether sending the request twice is harmless.

        Returns:
            Any: The decoded JSON reply.

        Raises:
            TransportError: if the API call failed, after retries when applicable.
        """
        try:
            self._ensure_valid_auth()
        except GoogleAuthError as e:
            raise TransportError(f'Authentication failed: {e}', reason='auth',
                                 function_name=function_name, details=details) from e

        retry_statuses = RETRY_STATUS_CODES if idempotent else THROTTLE_STATUS_CODES
        attempts = max(1, self.max_retries)

        for attempt in range(attempts):
            try:
                return request.execute()

            except HttpError as e:
                status = e.resp.status
                if status in retry_statuses and attempt < attempts - 1:
                    logger.warning(f'{function_name}: HTTP {status}, retrying (attempt {attempt + 1}/{attempts}).')
                    time.sleep(2 ** attempt)
                    continue
                raise TransportError(str(e), code=status, reason=getattr(e, 'reason', None),
                                     function_name=function_name, details=details) from e
            except (OSError, GoogleAuthError) as e:
                raise TransportError(f'Unexpected error: {e}', function_name=function_name,
                                     details=details) from e
