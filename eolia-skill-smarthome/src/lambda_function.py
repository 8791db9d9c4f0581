# lambda_function.py
import logging
import json
import os

from alexa_auth import handle_accept_grant
from alexa_device import AlexaDevice, parse_endpoint_id
from alexa_errors import handle_error
from alexa_response import AlexaResponse, alexa_timestamp
from eolia_config import EoliaConfig
from eolia_errors import AuthenticationError, DispatchError, EoliaError
from eolia_session import EoliaSession

logger = logging.getLogger()
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO"))

# Session außerhalb des Handlers halten
# (Dadurch wird sie bei Warm-Starts wiederverwendet)
_session = None


def get_session():
    global _session
    if _session is None:
        _session = EoliaSession(EoliaConfig.from_env())
    return _session


def reset_session():
    """Verwirft die Session, z.B. nach einem fatalen Authentifizierungsfehler."""
    global _session
    _session = None


def _scope_token(request):
    # Sicherer Zugriff auf das Token
    scope = request["directive"].get("endpoint", {}).get("scope", {})
    return scope.get("token")


def _get_device(request):
    endpoint_id = request["directive"].get("endpoint", {}).get("endpointId")
    return AlexaDevice(parse_endpoint_id(endpoint_id), get_session())


def handle_discovery(request):
    """Erstellt die Antwort auf den Alexa.Discovery / Discover Request."""
    session = get_session()

    devices = session.client.get_devices()
    # Die Geräteliste kann einen Re-Login ausgelöst haben
    session.sync.persist_session_token()

    endpoints = []
    for device in devices:
        logger.info(f"Discovery: {device.nickname} [{device.appliance_id}]")
        endpoints.extend(AlexaDevice.get_discovery_payloads(device))

    adr = AlexaResponse(name="Discover.Response", namespace="Alexa.Discovery")
    adr.set_payload_endpoints(endpoints)
    return adr.get()


def handle_report_state(request):
    """Antwortet auf Alexa.ReportState Anfragen."""
    device = _get_device(request)

    adr = AlexaResponse(
        name="StateReport",
        namespace="Alexa",
        correlation_token=request["directive"]["header"].get("correlationToken"),
        endpoint_id=device.endpoint_id,
        token=_scope_token(request)
    )

    # Szenen haben keinen abfragbaren Zustand
    if not device.is_scene:
        status, uncertainty = device.read_status()
        for prop in device.get_all_properties(status, uncertainty):
            adr.add_context_property(**prop)

    return adr.get()


def handle_control(request):
    """Verarbeitet alle Steuerungsbefehle (SetTargetTemperature, TurnOn, SetMode, etc.)"""
    device = _get_device(request)
    if device.is_scene:
        raise DispatchError(f"{device.endpoint_id} ist eine Szene")

    status, uncertainty = device.execute_directive(request["directive"])

    adr = AlexaResponse(
        name="Response",
        namespace="Alexa",
        correlation_token=request["directive"]["header"].get("correlationToken"),
        endpoint_id=device.endpoint_id,
        token=_scope_token(request)
    )

    # Alle aktuellen Properties (inkl. der Änderung) in den Context packen
    for prop in device.get_all_properties(status, uncertainty):
        adr.add_context_property(**prop)

    return adr.get()


def handle_scene(request):
    """Alexa.SceneController Activate / Deactivate für die Reinigung."""
    device = _get_device(request)
    if not device.is_scene:
        raise DispatchError(f"{device.endpoint_id} ist keine Szene")

    name = request["directive"]["header"]["name"]
    started = device.execute_scene(name)
    logger.info(f"Szene {device.endpoint_id} {name}: {'ausgeführt' if started else 'keine Änderung'}")

    adr = AlexaResponse(
        name=device.controllers[0].event_name(name),
        namespace="Alexa.SceneController",
        correlation_token=request["directive"]["header"].get("correlationToken"),
        endpoint_id=device.endpoint_id,
        token=_scope_token(request)
    )
    adr.set_payload({
        "cause": {"type": "APP_INTERACTION"},
        "timestamp": alexa_timestamp()
    })
    return adr.get()


DIRECTIVE_HANDLERS = {
    ("Alexa.Discovery", "Discover"): handle_discovery,
    ("Alexa.Authorization", "AcceptGrant"): handle_accept_grant,
    ("Alexa", "ReportState"): handle_report_state,
    ("Alexa.ThermostatController", "SetTargetTemperature"): handle_control,
    ("Alexa.ThermostatController", "AdjustTargetTemperature"): handle_control,
    ("Alexa.ThermostatController", "SetThermostatMode"): handle_control,
    ("Alexa.PowerController", "TurnOn"): handle_control,
    ("Alexa.PowerController", "TurnOff"): handle_control,
    ("Alexa.ModeController", "SetMode"): handle_control,
    ("Alexa.ToggleController", "TurnOn"): handle_control,
    ("Alexa.ToggleController", "TurnOff"): handle_control,
    ("Alexa.SceneController", "Activate"): handle_scene,
    ("Alexa.SceneController", "Deactivate"): handle_scene,
}


def lambda_handler(request, context):
    # Logge den kompletten Request, damit wir sehen, was Alexa genau will
    logger.info("FULL REQUEST: %s", json.dumps(request))

    if "directive" not in request:
        return {}

    header = request["directive"]["header"]
    namespace = header.get("namespace")
    name = header.get("name")
    logger.info(f"Namespace: {namespace} | Name: {name}")

    try:
        handler = DIRECTIVE_HANDLERS.get((namespace, name))
        if handler is None:
            raise DispatchError(f"namespace: {namespace}, name: {name}")
        response = handler(request)
    except AuthenticationError as e:
        reset_session()
        response = handle_error(request, e)
    except EoliaError as e:
        response = handle_error(request, e)
    except Exception as e:
        logger.exception("Unerwarteter Fehler")
        response = handle_error(request, e)

    logger.info("RESPONSE: %s", json.dumps(response))
    return response
