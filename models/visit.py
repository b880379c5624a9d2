from datetime import datetime, timezone

UNKNOWN_USER_AGENT = "unknown"

_CREATED = object()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    # 2025-06-03T10:15:00.000Z
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class VisitRecord:
    __slots__ = ("ip", "date", "time", "user_agent", "_raw")

    def __init__(self, ip: str, date: str, time: str = "", user_agent: str = None):
        self.ip = ip
        self.date = date  # YYYY-MM-DD (UTC)
        self.time = time
        self.user_agent = user_agent or UNKNOWN_USER_AGENT
        self._raw = _CREATED

    @classmethod
    def create(cls, ip: str, user_agent: str = None, now: datetime = None) -> "VisitRecord":
        now = now or utcnow()
        return cls(
            ip=ip,
            date=now.astimezone(timezone.utc).strftime("%Y-%m-%d"),
            time=iso_timestamp(now),
            user_agent=user_agent,
        )

    @classmethod
    def from_dict(cls, data) -> "VisitRecord":
        """
        Wrap an entry read from the log.

        Entries are kept as found, so one without a usable ip or date still
        counts and is written back unchanged.
        """
        fields = data if isinstance(data, dict) else {}
        record = cls(
            ip=fields.get("ip"),
            date=fields.get("date"),
            time=fields.get("time") or "",
            user_agent=fields.get("userAgent"),
        )
        record._raw = data
        return record

    def to_dict(self):
        if self._raw is not _CREATED:
            return self._raw
        return {
            "ip": self.ip,
            "date": self.date,
            "time": self.time,
            "userAgent": self.user_agent,
        }

    def matches(self, ip: str, date: str) -> bool:
        return self.ip == ip and self.date == date

    def __eq__(self, other):
        if not isinstance(other, VisitRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<VisitRecord {self.ip} {self.date}>"
