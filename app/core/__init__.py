"""
Shared infrastructure for the domain apps.

    core.models: BaseModel, UUIDPrimaryKeyMixin
    core.services: BaseService, ServiceResult
    core.exceptions: BaseApplicationError, ExternalServiceError
    core.views: health_check
"""
