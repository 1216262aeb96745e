"""
Apartments module.

Apartment listing, CRUD, picture upload encoding and form validation.

Public API:
- IApartmentService: Interface for apartment management
- ApartmentService: API-backed implementation
- ApartmentForm: Form values and request payload
- validate_apartment_form: Collects all field errors into FormValidationError
- PartialSaveError: Apartment saved, shareholders not
"""

from .interfaces import IApartmentService
from .models import ALLOWED_IMAGE_TYPES, MAX_IMAGE_BYTES, ApartmentForm, encode_image
from .validation import validate_apartment_form
from .service import ApartmentService, apartments_from_profile
from .exceptions import InvalidImageError, PartialSaveError

__all__ = [
    # Interface
    "IApartmentService",
    # Models
    "ApartmentForm",
    "ALLOWED_IMAGE_TYPES",
    "MAX_IMAGE_BYTES",
    "encode_image",
    # Validation
    "validate_apartment_form",
    # Implementation
    "ApartmentService",
    "apartments_from_profile",
    # Exceptions
    "InvalidImageError",
    "PartialSaveError",
]
