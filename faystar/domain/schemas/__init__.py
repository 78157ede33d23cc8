from faystar.domain.schemas.envelope import ServiceEnvelope, new_request_id, utc_timestamp

__all__ = ["ServiceEnvelope", "new_request_id", "utc_timestamp"]
