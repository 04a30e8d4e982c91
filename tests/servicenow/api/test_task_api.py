import unittest
from unittest.mock import patch, MagicMock, Mock

import requests

from servicenow.api.task_api import TaskAPI, TaskCountResult, build_task_query
from servicenow.exceptions import ServiceNowResponseError


class TestTaskAPI(unittest.TestCase):
    """
    Unit tests for the TaskAPI class.

    Tests cover:
    - Query construction
    - Counting results
    - Error status handling
    - Malformed bodies and transport errors
    """

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.base_url = "https://example.service-now.com"
        self.auth = ("svc_flag", "secret")
        self.api = TaskAPI(self.base_url, self.auth)
        patch('servicenow.api.servicenow_api.logger').start()

    def tearDown(self):
        patch.stopall()

    def _response(self, status_code=200, body=None):
        response = Mock()
        response.status_code = status_code
        response.reason = "OK" if status_code == 200 else "Error"
        response.json.return_value = body
        return response

    # ----- Query construction -----

    def test_build_task_query(self):
        """Test the encoded query filters active unassigned tasks of a group."""
        self.assertEqual(
            build_task_query("Service Desk"),
            "^active=true^assigned_to=^assignment_group=Service Desk",
        )

    def test_build_task_query_empty_group(self):
        """Test an empty group keeps an explicit empty clause."""
        self.assertEqual(
            build_task_query(""),
            "^active=true^assigned_to=^assignment_group=",
        )

    def test_task_query_params(self):
        """Test all query parameters are sent."""
        params = self.api.task_query_params("Service Desk")
        self.assertEqual(params, {
            "sysparm_fields": "number",
            "sysparm_exclude_reference_link": "true",
            "sysparm_limit": 200,
            "sysparm_query": "^active=true^assigned_to=^assignment_group=Service Desk",
        })

    # ----- Counting -----

    def test_get_open_task_count(self):
        """Test the count is the length of the result list."""
        body = {"result": [{"number": "TASK0001"}, {"number": "TASK0002"}, {"number": "INC0003"}]}
        self.api.get = MagicMock(return_value=self._response(200, body))

        result = self.api.get_open_task_count("Service Desk")

        self.api.get.assert_called_once_with(
            "api/now/table/task", params=self.api.task_query_params("Service Desk")
        )
        self.assertEqual(result, TaskCountResult(count=3, status_code=200))
        self.assertTrue(result.ok)

    def test_get_open_task_count_empty_result(self):
        """Test an empty result list counts as zero."""
        self.api.get = MagicMock(return_value=self._response(200, {"result": []}))

        self.assertEqual(self.api.count_open_tasks("Service Desk"), 0)

    @patch('servicenow.api.task_api.ServiceNowAPI.get')
    def test_get_open_task_count_sends_request(self, mock_get):
        """Test the request goes to the task table."""
        mock_get.return_value = self._response(200, {"result": [{"number": "TASK0001"}]})

        self.assertEqual(self.api.count_open_tasks("Service Desk"), 1)
        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "api/now/table/task")

    # ----- Error handling -----

    def test_error_status_counts_as_zero(self):
        """Test a 500 response yields zero without raising."""
        self.api.get = MagicMock(return_value=self._response(500))

        result = self.api.get_open_task_count("Service Desk")

        self.assertEqual(result.count, 0)
        self.assertEqual(result.status_code, 500)
        self.assertFalse(result.ok)
        self.assertFalse(result.unauthorized)

    def test_unauthorized_status(self):
        """Test a 401 response is reported as unauthorized."""
        self.api.get = MagicMock(return_value=self._response(401))

        result = self.api.get_open_task_count("Service Desk")

        self.assertEqual(result.count, 0)
        self.assertTrue(result.unauthorized)

    def test_missing_result_raises(self):
        """Test a body without a result list raises."""
        self.api.get = MagicMock(return_value=self._response(200, {"error": "nope"}))

        with self.assertRaises(ServiceNowResponseError):
            self.api.get_open_task_count("Service Desk")

    def test_transport_error_propagates(self):
        """Test connection errors reach the caller."""
        self.api.get = MagicMock(side_effect=requests.exceptions.ConnectionError("refused"))

        with self.assertRaises(requests.exceptions.RequestException):
            self.api.count_open_tasks("Service Desk")


if __name__ == '__main__':
    unittest.main()
