# alexa_auth.py

import logging

from alexa_response import AlexaResponse

logger = logging.getLogger(__name__)


def handle_accept_grant(request):
    """
    Verarbeitet den Alexa.Authorization / AcceptGrant Request.
    Der Skill meldet keine Events proaktiv, der Grant-Code wird daher nicht eingelöst.
    """
    payload = request.get("directive", {}).get("payload", {})
    if not payload.get("grant", {}).get("code"):
        logger.warning("AcceptGrant ohne grant_code.")

    # Die Antwort auf AcceptGrant ist immer ein leeres Payload
    adr = AlexaResponse(namespace="Alexa.Authorization", name="AcceptGrant.Response")
    return adr.get()
