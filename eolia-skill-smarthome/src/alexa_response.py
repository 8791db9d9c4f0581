# alexa_response.py

import uuid
from datetime import datetime, timezone


def alexa_timestamp(now=None):
    """Zeitstempel im Format, das Alexa erwartet (UTC, Millisekunden, 'Z')."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'


class AlexaResponse:
    def __init__(self, namespace="Alexa", name="Response", correlation_token=None,
                 endpoint_id=None, token=None, cookie=None):
        self.context_properties = []
        self.payload = {}
        self.header = {
            "namespace": namespace,
            "name": name,
            "messageId": str(uuid.uuid4()),
            "payloadVersion": "3"
        }
        if correlation_token:
            self.header["correlationToken"] = correlation_token

        self.endpoint = None
        if endpoint_id:
            self.endpoint = {"endpointId": endpoint_id}
            if token:
                self.endpoint["scope"] = {"type": "BearerToken", "token": token}
            if cookie:
                self.endpoint["cookie"] = cookie

        # Discovery, AcceptGrant und Szenen-Events haben keinen Kontext mit Properties
        self.with_context = namespace == "Alexa" and name in ("Response", "StateReport")

    def add_context_property(self, namespace, name, value, instance=None,
                             uncertainty=0, time_of_sample=None):
        prop = {"namespace": namespace}
        if instance:
            prop["instance"] = instance
        prop.update({
            "name": name,
            "value": value,
            "timeOfSample": time_of_sample or alexa_timestamp(),
            "uncertaintyInMilliseconds": uncertainty
        })
        self.context_properties.append(prop)

    def set_payload(self, payload):
        self.payload = payload

    def set_payload_endpoints(self, endpoints):
        self.payload = {"endpoints": endpoints}

    def get(self):
        event = {"header": self.header}
        if self.endpoint:
            event["endpoint"] = self.endpoint
        event["payload"] = self.payload

        response = {"event": event}
        if self.with_context:
            response["context"] = {"properties": self.context_properties}
        elif self.header["namespace"] == "Alexa.SceneController":
            response["context"] = {}
        return response
