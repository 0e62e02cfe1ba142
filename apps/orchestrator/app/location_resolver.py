from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# Used only when the model gives no usable codes for a side.
# Most relevant airport first.
COUNTRY_AIRPORTS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "germany": ("FRA", "MUC", "BER", "DUS", "HAM"),
    "france": ("CDG", "ORY", "NCE", "LYS", "MRS"),
    "italy": ("FCO", "MXP", "VCE", "NAP", "BGY"),
    "spain": ("MAD", "BCN", "PMI", "AGP", "SVQ"),
    "uk": ("LHR", "LGW", "MAN", "EDI", "BHX"),
    "united kingdom": ("LHR", "LGW", "MAN", "EDI", "BHX"),
    "usa": ("JFK", "LAX", "ORD", "DFW", "ATL"),
    "united states": ("JFK", "LAX", "ORD", "DFW", "ATL"),
    "canada": ("YYZ", "YVR", "YUL", "YYC", "YOW"),
    "japan": ("NRT", "HND", "KIX", "NGO", "FUK"),
    "australia": ("SYD", "MEL", "BNE", "PER", "ADL"),
    "india": ("DEL", "BOM", "BLR", "CCU", "MAA"),
    "china": ("PEK", "PVG", "CAN", "CTU", "SZX"),
    "brazil": ("GRU", "GIG", "BSB", "CGH", "SSA"),
    "mexico": ("MEX", "CUN", "GDL", "MTY", "TIJ"),
})

_CODE_SHAPED = re.compile(r"^[A-Za-z]{3}$")


def code_shaped(query: Optional[str]) -> Optional[Tuple[str, ...]]:
    # direct IATA code: "cdg" -> ("CDG",)
    q = (query or "").strip()
    if _CODE_SHAPED.match(q):
        return (q.upper(),)
    return None


def country_lookup(query: Optional[str]) -> Optional[Tuple[str, ...]]:
    return COUNTRY_AIRPORTS.get((query or "").strip().lower())


# Per-side fallback tiers, tried in order.
SIDE_TIERS = (code_shaped, country_lookup)


def resolve(query: Optional[str]) -> Tuple[str, ...]:
    for tier in SIDE_TIERS:
        codes = tier(query)
        if codes:
            return codes
    return ()
