"""WebSocket protocol configuration and constants."""

from __future__ import annotations

WS_ENDPOINT_PATH = "/ws"

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_PAYLOAD = "payload"

# Client -> server message types
WS_MSG_PING = "ping"
WS_MSG_PONG = "pong"
WS_MSG_TEXT_INPUT = "textInput"
WS_MSG_GET_CONVERSATION = "getConversation"
WS_MSG_START_RECOGNITION = "startRecognition"
WS_MSG_STOP_RECOGNITION = "stopRecognition"
WS_MSG_CLEAR_CONVERSATION = "clearConversation"

# Server -> client message types
WS_MSG_ERROR = "error"
WS_MSG_STATUS = "status"
WS_MSG_CONNECTED = "connected"
WS_MSG_HEARTBEAT = "heartbeat"
WS_MSG_INTERRUPTED = "interrupted"
WS_MSG_LLM_RESPONSE = "llmResponse"
WS_MSG_TRANSCRIPTION = "transcription"
WS_MSG_RECOGNITION_STARTED = "recognitionStarted"
WS_MSG_RECOGNITION_STOPPED = "recognitionStopped"
WS_MSG_CONVERSATION_CLEARED = "conversationCleared"
WS_MSG_CONVERSATION_HISTORY = "conversationHistory"
WS_MSG_PARTIAL_TRANSCRIPTION = "partialTranscription"

WS_STATUS_READY = "ready"
WS_READY_MESSAGE = "Server is ready, you can start the conversation"

# Close codes
WS_CLOSE_NORMAL_CODE = 1000
WS_CLOSE_HEARTBEAT_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002

WS_CLOSE_HEARTBEAT_REASON = "heartbeat timeout"

# Heartbeat
ENV_WS_HEARTBEAT_INTERVAL_S = "WS_HEARTBEAT_INTERVAL_S"
ENV_WS_HEARTBEAT_GRACE_S = "WS_HEARTBEAT_GRACE_S"
DEFAULT_WS_HEARTBEAT_INTERVAL_S = 30.0
DEFAULT_WS_HEARTBEAT_GRACE_S = 5.0

# Outbound frames buffered per connection before sends start failing
ENV_WS_OUTBOUND_QUEUE_MAX = "WS_OUTBOUND_QUEUE_MAX"
DEFAULT_WS_OUTBOUND_QUEUE_MAX = 256

# Errors (payload.details.code values)
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"
WS_ERROR_INVALID_MESSAGE = "invalid_message"
WS_ERROR_INVALID_PAYLOAD = "invalid_payload"
WS_ERROR_RECOGNITION = "recognition_error"
WS_ERROR_GENERATION = "generation_error"
WS_ERROR_SYNTHESIS = "synthesis_error"
WS_ERROR_INTERNAL = "internal_error"

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_KEY_PAYLOAD",
    "WS_MSG_PING",
    "WS_MSG_PONG",
    "WS_MSG_TEXT_INPUT",
    "WS_MSG_GET_CONVERSATION",
    "WS_MSG_START_RECOGNITION",
    "WS_MSG_STOP_RECOGNITION",
    "WS_MSG_CLEAR_CONVERSATION",
    "WS_MSG_ERROR",
    "WS_MSG_STATUS",
    "WS_MSG_CONNECTED",
    "WS_MSG_HEARTBEAT",
    "WS_MSG_INTERRUPTED",
    "WS_MSG_LLM_RESPONSE",
    "WS_MSG_TRANSCRIPTION",
    "WS_MSG_RECOGNITION_STARTED",
    "WS_MSG_RECOGNITION_STOPPED",
    "WS_MSG_CONVERSATION_CLEARED",
    "WS_MSG_CONVERSATION_HISTORY",
    "WS_MSG_PARTIAL_TRANSCRIPTION",
    "WS_STATUS_READY",
    "WS_READY_MESSAGE",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_HEARTBEAT_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_HEARTBEAT_REASON",
    "ENV_WS_HEARTBEAT_INTERVAL_S",
    "ENV_WS_HEARTBEAT_GRACE_S",
    "DEFAULT_WS_HEARTBEAT_INTERVAL_S",
    "DEFAULT_WS_HEARTBEAT_GRACE_S",
    "ENV_WS_OUTBOUND_QUEUE_MAX",
    "DEFAULT_WS_OUTBOUND_QUEUE_MAX",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_INVALID_PAYLOAD",
    "WS_ERROR_RECOGNITION",
    "WS_ERROR_GENERATION",
    "WS_ERROR_SYNTHESIS",
    "WS_ERROR_INTERNAL",
]
