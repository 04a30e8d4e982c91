from dataclasses import dataclass
from typing import Any, Dict

from .servicenow_api import ServiceNowAPI
from ..exceptions import ServiceNowResponseError

TASK_TABLE = 'api/now/table/task'
RESULT_LIMIT = 200


@dataclass(frozen=True)
class TaskCountResult:
    """Number of open tasks together with the status code it came from."""
    count: int
    status_code: int

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def unauthorized(self) -> bool:
        return self.status_code in (401, 403)


def build_task_query(assignment_group: str) -> str:
    """
    Builds the encoded query for active tasks of a group with no assignee.

    An empty group is kept as an explicit empty clause (assignment_group=),
    which ServiceNow matches against tasks with no assignment group.
    """
    clauses = ['active=true', 'assigned_to=', f'assignment_group={assignment_group}']
    return ''.join(f'^{clause}' for clause in clauses)


class TaskAPI(ServiceNowAPI):
    def task_query_params(self, assignment_group: str) -> Dict[str, Any]:
        """
        Returns the query parameters for the open task read.

        Args:
            assignment_group: The assignment group name or sys_id.
        """
        return {
            'sysparm_fields': 'number',
            'sysparm_exclude_reference_link': 'true',
            'sysparm_limit': RESULT_LIMIT,
            'sysparm_query': build_task_query(assignment_group),
        }

    def get_open_task_count(self, assignment_group: str) -> TaskCountResult:
        """
        Counts the active, unassigned tasks in an assignment group.

        A non-200 status is logged and reported as a count of zero.

        Args:
            assignment_group: The assignment group name or sys_id.

        Raises:
            requests.exceptions.RequestException: On connection errors and timeouts.
            ServiceNowResponseError: If a 200 body has no result list.
        """
        response = self.get(TASK_TABLE, params=self.task_query_params(assignment_group))
        data = self._handle_response(response)
        if data is None:
            return TaskCountResult(count=0, status_code=response.status_code)

        result = data.get('result')
        if not isinstance(result, list):
            raise ServiceNowResponseError("Response body has no 'result' list")
        return TaskCountResult(count=len(result), status_code=response.status_code)

    def count_open_tasks(self, assignment_group: str) -> int:
        """
        Returns only the open task count, see get_open_task_count.

        Args:
            assignment_group: The assignment group name or sys_id.
        """
        return self.get_open_task_count(assignment_group).count
