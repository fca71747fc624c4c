import os
import unittest
from unittest import mock
import httplib2
from googleapiclient.errors import HttpError
from gsheetsLib.client import ClientWrapper
from gsheetsLib.config import TOKEN_ENV_VAR, CREDS_ENV_VAR
from gsheetsLib.models import TransportError

def http_error(status):
    content = ('{"error": {"code": %d, "message": "Backend error"}}' % status).encode('utf-8')
    return HttpError(httplib2.Response({'status': status}), content)

class FlakyRequest:

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def execute(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

@mock.patch('gsheetsLib.client.time.sleep')
class TestExecute(unittest.TestCase):

    def setUp(self):
        self.client = ClientWrapper(service=object())

    def test_success(self, sleep):
        request = FlakyRequest({'values': []})
        self.assertEqual(self.client.execute(request), {'values': []})
        sleep.assert_not_called()

    def test_retries_retryable_status(self, sleep):
        request = FlakyRequest(http_error(503), http_error(429), {'ok': True})
        self.assertEqual(self.client.execute(request), {'ok': True})
        self.assertEqual(request.calls, 3)
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [1, 2])

    def test_gives_up_after_max_retries(self, sleep):
        request = FlakyRequest(http_error(500), http_error(500), http_error(500))
        with self.assertRaises(TransportError) as ctx:
            self.client.execute(request, function_name='Sheet.get_raw', details={'range': 'A!A1'})
        self.assertEqual(request.calls, 3)
        self.assertEqual(ctx.exception.code, 500)
        self.assertEqual(ctx.exception.reason, 'Backend error')
        self.assertEqual(ctx.exception.details, {'range': 'A!A1'})

    def test_client_error_not_retried(self, sleep):
        request = FlakyRequest(http_error(400))
        with self.assertRaises(TransportError):
            self.client.execute(request)
        self.assertEqual(request.calls, 1)
        sleep.assert_not_called()

    def test_zero_retries_still_sends_once(self, sleep):
        client = ClientWrapper(service=object(), max_retries=0)
        request = FlakyRequest({'clearedRange': 'A!A1'})
        self.assertEqual(client.execute(request), {'clearedRange': 'A!A1'})
        self.assertEqual(request.calls, 1)

    def test_zero_retries_still_raises(self, sleep):
        client = ClientWrapper(service=object(), max_retries=0)
        request = FlakyRequest(http_error(503))
        with self.assertRaises(TransportError) as ctx:
            client.execute(request)
        self.assertEqual(ctx.exception.code, 503)
        self.assertEqual(request.calls, 1)
        sleep.assert_not_called()

    # --- Requests that are not safe to repeat ---
    def test_non_idempotent_not_retried_on_server_error(self, sleep):
        request = FlakyRequest(http_error(502), {'ok': True})
        with self.assertRaises(TransportError) as ctx:
            self.client.execute(request, idempotent=False)
        self.assertEqual(ctx.exception.code, 502)
        self.assertEqual(request.calls, 1)
        sleep.assert_not_called()

    def test_non_idempotent_retried_on_throttle(self, sleep):
        request = FlakyRequest(http_error(429), {'ok': True})
        self.assertEqual(self.client.execute(request, idempotent=False), {'ok': True})
        self.assertEqual(request.calls, 2)

    def test_network_error(self, sleep):
        request = FlakyRequest(ConnectionResetError('reset by peer'))
        with self.assertRaises(TransportError) as ctx:
            self.client.execute(request)
        self.assertIsInstance(ctx.exception.__cause__, ConnectionResetError)
        self.assertIsNone(ctx.exception.code)

class TestAuthentication(unittest.TestCase):

    @mock.patch.dict(os.environ, {TOKEN_ENV_VAR: '{"token": "abc"}', CREDS_ENV_VAR: 'not json'})
    def test_env_json(self):
        client = ClientWrapper(service=object())
        self.assertEqual(client.token_dict, {'token': 'abc'})
        self.assertIsNone(client.creds_dict)

    @mock.patch.dict(os.environ, {TOKEN_ENV_VAR: '{"token": "abc"}'})
    @mock.patch('gsheetsLib.client.build')
    @mock.patch('gsheetsLib.client.Credentials')
    def test_token_from_env(self, credentials, build):
        credentials.from_authorized_user_info.return_value.valid = True
        client = ClientWrapper(scopes=['scope'])
        credentials.from_authorized_user_info.assert_called_once_with({'token': 'abc'}, ['scope'])
        build.assert_called_once_with('sheets', 'v4', credentials=client.creds)
        self.assertIs(client.service, build.return_value)

    @mock.patch.dict(os.environ, {TOKEN_ENV_VAR: '{"token": "abc"}'})
    @mock.patch('gsheetsLib.client.build')
    @mock.patch('gsheetsLib.client.Credentials')
    def test_expired_token_refreshed(self, credentials, build):
        creds = credentials.from_authorized_user_info.return_value
        creds.valid = False
        creds.expired = True
        creds.refresh_token = 'refresh'
        ClientWrapper()
        creds.refresh.assert_called_once()

if __name__ == '__main__':
    unittest.main()
