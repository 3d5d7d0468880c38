# patterns.py
import re


class Patterns:
    # Anchored flight idents, tried in order. The last one is a search pattern
    # for lines like "WAS 12 NOON DL1466" where the ident trails free text.
    FLIGHT_NO_STRICT = (
        re.compile(r"^[A-Z]{2,3}\s*\d{1,4}[A-Z]?$", re.IGNORECASE),  # AA123, UA1234A
        re.compile(r"^[A-Z]{2,3}\s*CABIN\s*#?\s*\d{1,4}-?\d*$", re.IGNORECASE),  # JLL CABIN # 111-105
        re.compile(r"^[A-Z]{2,3}\s*\d{1,4}$", re.IGNORECASE),  # JLL123
    )
    FLIGHT_NO_TRAILING = re.compile(r"[A-Z]{2,3}\d{1,4}[A-Z]?$", re.IGNORECASE)
    WHITESPACE = re.compile(r"\s+")
    CABIN_MARKER = re.compile(r"CABIN#?")
    CARRIER_PREFIX = re.compile(r"^[A-Z]{2,3}")

    AIRPORT_CODE = re.compile(r"^[A-Z]{2,4}$")  # JAC, KJAC, AP

    # Block boundaries: "101*2 SUV", "7 EXEC", "SEDAN ...", or a bare "ASAP"
    BLOCK_START = re.compile(r"^\d+\*?\d*.*SUV|EXEC|SEDAN", re.IGNORECASE)
    ASAP = re.compile(r"^ASAP$", re.IGNORECASE)

    TIME_12H = re.compile(r"(\d{1,2}):?(\d{2})?\s*(AM|PM)", re.IGNORECASE)
    TIME_12H_STRICT = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)
    TIME_ONLY_LINE = re.compile(r"^(?:\d{1,2}:?\d{0,2}\s*(?:AM|PM)|ASAP)$", re.IGNORECASE)

    CANCEL = re.compile(r"cancel", re.IGNORECASE)
    PHONE = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")
    PRICE = re.compile(r"\$\d+(?:\.\d{2})?")
    PRICE_WHOLE = re.compile(r"\$?(\d+)(?:\.\d{2})?")

    DETECTED_DATE = re.compile(r"Detected date: (\d{4}-\d{2}-\d{2})")
    DETECTED_DATE_SEGMENT = re.compile(r"\s*\|\s*Detected date: \d{4}-\d{2}-\d{2}")

    DATE_MDY = re.compile(r"\b(\d{1,2})[/-](\d{1,2})[/-](\d{2}|\d{4})\b")
    DATE_YMD = re.compile(r"\b(\d{4})[/-](\d{1,2})[/-](\d{1,2})\b")
    DATE_RELATIVE = re.compile(r"\b(yesterday|today|tomorrow)\b", re.IGNORECASE)
    DATE_MD = re.compile(r"\b(\d{1,2})/(\d{1,2})\b")
    # Case-sensitive: "may 2 bags" is not a date
    DATE_MONTH_NAME = re.compile(
        r"\b(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
        r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?\s+(\d{1,2})\b"
    )

    # Detector hints for pasted text
    HINT_FLIGHT = re.compile(r"[A-Z]{2,3}\s*\d{1,4}[A-Z]?|[A-Z]{2,3}\s*CABIN|ASAP", re.IGNORECASE)
    HINT_TIME = re.compile(r"\d{1,2}:?\d{0,2}\s*(AM|PM)|ASAP", re.IGNORECASE)
    HINT_VEHICLE = re.compile(r"SUV|EXEC|SEDAN", re.IGNORECASE)
    HINT_PRICE = re.compile(r"\$\d+\.?\d*")
    HINT_RUN_ID = re.compile(r"^\d+\*?\d*")
    HINT_AIRPORT = re.compile(r"\b(AP|JLL|SK|DL|AA|UA)\b", re.IGNORECASE)


patterns = Patterns()
