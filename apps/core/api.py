# apps/core/api.py
"""
Helpers shared by the JSON API views: the ``{success, message, data}``
envelope, request body parsing, form validation and the error boundary.
"""

import json
import logging
from functools import wraps

from django.db import DatabaseError
from django.http import JsonResponse

from .exceptions import ServiceError, StorageError, ValidationError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = 'Server error'


def api_success(data=None, message=None, status=200, **extra):
    payload = {'success': True}
    if data is not None:
        payload['data'] = data
    if message:
        payload['message'] = str(message)
    payload.update(extra)
    return JsonResponse(payload, status=status)


def api_error(message, status=400, errors=None):
    payload = {'success': False, 'message': str(message)}
    if errors:
        payload['errors'] = errors
    return JsonResponse(payload, status=status)


def parse_json_body(request):
    """
    Return the request payload as a dict.

    JSON bodies are decoded; form-encoded bodies fall back to ``request.POST``.
    """
    if request.content_type != 'application/json':
        return request.POST.dict()

    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('Malformed JSON body')

    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def validate_form(form_class, data, **kwargs):
    """
    Bind ``data`` to ``form_class`` and return the validated form.

    Raises ValidationError carrying the field errors when the form is invalid.
    """
    form = form_class(data, **kwargs)
    if form.is_valid():
        return form

    errors = {field: [str(message) for message in messages] for field, messages in form.errors.items()}
    field, messages = next(iter(errors.items()))
    first = messages[0]
    if field != '__all__':
        first = f"{field}: {first}"
    raise ValidationError(first, errors=errors)


def api_endpoint(view_func):
    """
    Error boundary for API views.

    Service errors become their JSON response; storage and unexpected errors
    are logged and returned as a generic 500.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except StorageError as e:
            logger.error(f"Storage error in {view_func.__name__}: {e}")
            return api_error(SERVER_ERROR_MESSAGE, status=StorageError.status_code)
        except ServiceError as e:
            return api_error(e.message, status=e.status_code, errors=e.errors)
        except DatabaseError:
            logger.exception(f"Database error in {view_func.__name__}")
            return api_error(SERVER_ERROR_MESSAGE, status=500)
        except Exception:
            logger.exception(f"Unexpected error in {view_func.__name__}")
            return api_error(SERVER_ERROR_MESSAGE, status=500)

    return wrapper
