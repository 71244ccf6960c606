# common/exceptions.py
from rest_framework.views import exception_handler as drf_handler


def custom_exception_handler(exc, context):
    response = drf_handler(exc, context)
    if response is not None and isinstance(response.data, dict):
        response.data = {"error": True, "detail": response.data.get("detail", response.data)}
    return response
