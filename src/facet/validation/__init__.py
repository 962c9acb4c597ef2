from facet.validation.request_validator import HttpRequestValidator
from facet.validation.service import ValidationService
from facet.validation.validation_module import ValidationModule, load_rules

__all__ = ["HttpRequestValidator", "ValidationService", "ValidationModule", "load_rules"]
