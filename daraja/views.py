"""
Views receiving Daraja callbacks.
"""

import json
import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .callbacks import parse_result, parse_stk_callback
from .config import config
from .constants import CALLBACK_ACCEPTED
from .exceptions import CallbackError
from .signals import (
    queue_timeout_received, stk_callback_received, transaction_result_received
)
from .utils.security import get_client_ip, verify_callback_ip

logger = logging.getLogger(__name__)


def _rejected_source(request):
    """Return a 403 response when the caller's IP is not allowed."""
    client_ip = get_client_ip(request, trust_forwarded_for=config.trust_forwarded_for)
    if not verify_callback_ip(client_ip, config.callback_allowed_ips):
        logger.warning(f"Rejected Daraja callback from unauthorized IP: {client_ip}")
        return HttpResponse(status=403)
    return None


def _load_body(request):
    try:
        return json.loads(request.body)
    except ValueError:
        raise CallbackError("Callback body is not valid JSON")


@csrf_exempt
@require_POST
def stk_callback(request):
    """
    Handle STK push results.
    """
    rejected = _rejected_source(request)
    if rejected:
        return rejected

    try:
        callback = parse_stk_callback(_load_body(request))
    except CallbackError as e:
        logger.warning(f"Invalid STK callback: {e.message}")
        return JsonResponse({'ResultCode': 1, 'ResultDesc': e.message}, status=400)

    logger.info(
        f"Received STK callback {callback.checkout_request_id}: "
        f"ResultCode={callback.result_code}"
    )
    stk_callback_received.send(sender=stk_callback, callback=callback)
    return JsonResponse(CALLBACK_ACCEPTED)


@csrf_exempt
@require_POST
def result_callback(request):
    """
    Handle results of B2C, B2B, balance, status and reversal requests.
    """
    rejected = _rejected_source(request)
    if rejected:
        return rejected

    try:
        result = parse_result(_load_body(request))
    except CallbackError as e:
        logger.warning(f"Invalid result callback: {e.message}")
        return JsonResponse({'ResultCode': 1, 'ResultDesc': e.message}, status=400)

    logger.info(
        f"Received result for {result.originator_conversation_id}: "
        f"ResultCode={result.result_code}"
    )
    transaction_result_received.send(sender=result_callback, result=result)
    return JsonResponse(CALLBACK_ACCEPTED)


@csrf_exempt
@require_POST
def timeout_callback(request):
    """
    Handle queue timeout notifications.
    """
    rejected = _rejected_source(request)
    if rejected:
        return rejected

    try:
        payload = _load_body(request)
    except CallbackError as e:
        return JsonResponse({'ResultCode': 1, 'ResultDesc': e.message}, status=400)

    logger.warning(f"Daraja request timed out in queue: {payload}")
    queue_timeout_received.send(sender=timeout_callback, payload=payload)
    return JsonResponse(CALLBACK_ACCEPTED)
