"""
Go tarzı süre string'leri ("300ms", "1.5h", "2h45m") için parse/format.

CHECK_INTERVAL ve REPORT_INTERVAL bu formatta gelir; uyarı mesajı da süreyi
aynı kanonik formda ("5m0s") gösterir.
"""

import re
from datetime import timedelta

_NANOS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5
    "μs": 1_000,  # U+03BC
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# Go Duration int64 nanosaniye sınırı
_MAX_NANOS = (1 << 63) - 1

_COMPONENT = r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"(?:{_COMPONENT})+")
_COMPONENT_RE = re.compile(_COMPONENT)


def parse_duration(text: str) -> timedelta:
    """
    Go `time.ParseDuration` ile aynı grameri kabul eder.

    Çözünürlük timedelta'nın sınırı olan mikrosaniyedir; mikrosaniye altı
    kısımlar yukarı yuvarlanır (örn. "500ns" -> 1µs, "1500ns" -> 2µs).

    Raises:
        ValueError: string geçerli bir süre değilse
    """
    s = text.strip()
    original = s
    sign = 1
    if s[:1] in ("-", "+"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]

    if s == "0":
        return timedelta(0)
    if not s or not _DURATION_RE.fullmatch(s):
        raise ValueError(f"invalid duration {original!r}")

    total = 0
    for number, unit in _COMPONENT_RE.findall(s):
        whole, _, frac = number.partition(".")
        scale = _NANOS[unit]
        total += int(whole or 0) * scale
        if frac:
            total += int(frac) * scale // 10 ** len(frac)

    limit = _MAX_NANOS + 1 if sign < 0 else _MAX_NANOS
    if total > limit:
        raise ValueError(f"invalid duration {original!r}: out of range")

    micros = -(-total // 1_000)
    return timedelta(microseconds=sign * micros)


def _with_fraction(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    digits = str(frac).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


def format_duration(d: timedelta) -> str:
    """Süreyi Go `Duration.String()` formatında yaz: 90s -> "1m30s", 0.5s -> "500ms"."""
    nanos = ((d.days * 86400 + d.seconds) * 1_000_000 + d.microseconds) * 1_000
    sign = "-" if nanos < 0 else ""
    u = abs(nanos)

    if u == 0:
        return "0s"

    if u < _NANOS["s"]:
        if u < _NANOS["us"]:
            return f"{sign}{u}ns"
        if u < _NANOS["ms"]:
            return f"{sign}{_with_fraction(u, _NANOS['us'])}µs"
        return f"{sign}{_with_fraction(u, _NANOS['ms'])}ms"

    text = _with_fraction(u % _NANOS["m"], _NANOS["s"]) + "s"
    minutes = u // _NANOS["m"]
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text
