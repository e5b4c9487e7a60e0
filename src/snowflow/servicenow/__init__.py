"""ServiceNow components. Importing this package registers them."""

from snowflow.servicenow.client import ServiceNowAPIError, ServiceNowClient
from snowflow.servicenow.get_incidents import COMPONENT_NAME, GetIncidents

__all__ = ["COMPONENT_NAME", "GetIncidents", "ServiceNowAPIError", "ServiceNowClient"]
