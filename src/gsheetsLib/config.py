# Authentication settings
AUTH_FOLDER = 'auth'
CRED_FILE_NAME = 'cred.json'
TOKEN_FILE_NAME = 'token.json'

CRED_PATH = f'{AUTH_FOLDER}/{CRED_FILE_NAME}'                # OAuth client JSON downloaded from GCP.
TOKEN_PATH = f'{AUTH_FOLDER}/{TOKEN_FILE_NAME}'              # Access token saved after the first login. Delete it if SCOPES change.
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Plain-text JSON alternatives to the files above.
TOKEN_ENV_VAR = 'GOOGLE_SERVICE_TOKEN'
CREDS_ENV_VAR = 'GOOGLE_SERVICE_CREDS'

# Transport retry policy
MAX_RETRIES = 3
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)
THROTTLE_STATUS_CODES = (429,)                               # Only these are retried for requests that are not safe to repeat.

DEFAULT_INPUT_OPTION = 'USER_ENTERED'
