from .api.servicenow_api import ServiceNowAPI
from .api.task_api import TaskAPI, TaskCountResult
from .exceptions import ServiceNowError, ServiceNowResponseError

__all__ = [
    'ServiceNowAPI',
    'TaskAPI',
    'TaskCountResult',
    'ServiceNowError',
    'ServiceNowResponseError',
]
