from .servicenow_api import ServiceNowAPI, DEFAULT_BASE_URL, REQUEST_TIMEOUT
from .task_api import TaskAPI, TaskCountResult

__all__ = [
    'ServiceNowAPI',
    'DEFAULT_BASE_URL',
    'REQUEST_TIMEOUT',
    'TaskAPI',
    'TaskCountResult',
]
