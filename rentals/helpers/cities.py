from __future__ import annotations

from typing import Optional

UAE_CITIES = frozenset(
    {
        "Dubai",
        "Abu Dhabi",
        "Sharjah",
        "Ajman",
        "Fujairah",
        "Ras Al Khaimah",
        "Umm Al Quwain",
        "Dubai Marina",
        "Downtown Dubai",
        "Jumeirah",
        "Deira",
        "Bur Dubai",
        "Al Barsha",
        "Dubai Investment Park",
        "Dubai Silicon Oasis",
        "Dubai South",
        "Al Nahda Dubai",
        "Jumeirah Lake Towers",
        "Business Bay",
        "DIFC",
        "Dubai Hills",
        "Al Qusais",
        "Al Mizhar",
        "International City",
        "Discovery Gardens",
        "Dubai Sports City",
        "Abu Dhabi City",
        "Al Ain",
        "Al Ruwais",
        "Khalifa City",
        "Al Shamkha",
        "Yas Island",
        "Saadiyat Island",
        "Al Reef",
        "Al Rahba",
        "Masdar City",
        "Mohammed Bin Zayed City",
        "Al Falah",
        "Al Mushrif",
        "Tourist Club Area",
        "Sharjah City",
        "Al Nahda Sharjah",
        "Al Qasimia",
        "Al Majaz",
        "Al Khan",
        "Al Taawun",
        "Al Suyoh",
        "Muwaileh",
        "University City Sharjah",
    }
)


def validate_uae_city(city: Optional[str]) -> bool:
    """
    Exact, case-sensitive check against the UAE city/district allow-list.
    "dubai" and " Dubai" are both rejected.
    """
    if not isinstance(city, str):
        return False
    return city in UAE_CITIES
