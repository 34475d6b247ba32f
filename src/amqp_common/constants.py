"""
Protocol-level constant tables shared by AMQP client layers.

- AmqpResponseStatusCode: HTTP-like status codes reported by AMQP brokers
  (management operations, CBS token puts, request/response links)
- MESSAGE_PROPERTIES: field names of the AMQP message properties section
- MESSAGE_HEADER: field names of the AMQP message header section
"""

from enum import IntEnum


class AmqpResponseStatusCode(IntEnum):
    """
    HTTP-like response status codes for status-code values provided by an AMQP broker.

    Several names are aliases sharing one value (e.g. ``Ambiguous`` and
    ``MultipleChoices`` are both 300). Lookup by value returns the first name
    declared for it.
    """

    Continue = 100
    SwitchingProtocols = 101
    OK = 200
    Created = 201
    Accepted = 202
    NonAuthoritativeInformation = 203
    NoContent = 204
    ResetContent = 205
    PartialContent = 206
    Ambiguous = 300
    MultipleChoices = 300
    Moved = 301
    MovedPermanently = 301
    Found = 302
    Redirect = 302
    RedirectMethod = 303
    SeeOther = 303
    NotModified = 304
    UseProxy = 305
    Unused = 306
    RedirectKeepVerb = 307
    TemporaryRedirect = 307
    BadRequest = 400
    Unauthorized = 401
    PaymentRequired = 402
    Forbidden = 403
    NotFound = 404
    MethodNotAllowed = 405
    NotAcceptable = 406
    ProxyAuthenticationRequired = 407
    RequestTimeout = 408
    Conflict = 409
    Gone = 410
    LengthRequired = 411
    PreconditionFailed = 412
    RequestEntityTooLarge = 413
    RequestUriTooLong = 414
    UnsupportedMediaType = 415
    RequestedRangeNotSatisfiable = 416
    ExpectationFailed = 417
    UpgradeRequired = 426
    InternalServerError = 500
    NotImplemented = 501
    BadGateway = 502
    ServiceUnavailable = 503
    GatewayTimeout = 504
    HttpVersionNotSupported = 505


# Predefined protocol level properties of an AMQP message
MESSAGE_PROPERTIES: tuple[str, ...] = (
    "message_id",
    "reply_to",
    "to",
    "correlation_id",
    "content_type",
    "absolute_expiry_time",
    "group_id",
    "group_sequence",
    "reply_to_group_id",
    "content_encoding",
    "creation_time",
    "subject",
    "user_id",
)

# Predefined protocol level properties of an AMQP message header
MESSAGE_HEADER: tuple[str, ...] = (
    "first_acquirer",
    "delivery_count",
    "ttl",
    "durable",
    "priority",
)


__all__ = [
    "AmqpResponseStatusCode",
    "MESSAGE_HEADER",
    "MESSAGE_PROPERTIES",
]
