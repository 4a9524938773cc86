"""Curated lookup tables for zone labels."""

from __future__ import annotations

from typing import Final

UNIVERSAL_TIME: Final[str] = "Universal Time"

COUNTRY_BY_ZONE: Final[dict[str, str]] = {
    # Africa
    "Africa/Cairo": "Egypt",
    "Africa/Johannesburg": "South Africa",
    "Africa/Lagos": "Nigeria",
    "Africa/Nairobi": "Kenya",
    "Africa/Accra": "Ghana",
    "Africa/Casablanca": "Morocco",
    # Americas
    "America/New_York": "United States",
    "America/Chicago": "United States",
    "America/Denver": "United States",
    "America/Los_Angeles": "United States",
    "America/Phoenix": "United States",
    "America/Anchorage": "United States",
    "America/Toronto": "Canada",
    "America/Vancouver": "Canada",
    "America/Mexico_City": "Mexico",
    "America/Sao_Paulo": "Brazil",
    "America/Argentina/Buenos_Aires": "Argentina",
    "America/Bogota": "Colombia",
    "America/Lima": "Peru",
    "America/Santiago": "Chile",
    "America/Caracas": "Venezuela",
    # Asia
    "Asia/Tokyo": "Japan",
    "Asia/Shanghai": "China",
    "Asia/Hong_Kong": "Hong Kong",
    "Asia/Singapore": "Singapore",
    "Asia/Seoul": "South Korea",
    "Asia/Bangkok": "Thailand",
    "Asia/Dubai": "United Arab Emirates",
    "Asia/Kolkata": "India",
    "Asia/Jakarta": "Indonesia",
    "Asia/Ho_Chi_Minh": "Vietnam",
    "Asia/Taipei": "Taiwan",
    "Asia/Manila": "Philippines",
    "Asia/Kuala_Lumpur": "Malaysia",
    "Asia/Riyadh": "Saudi Arabia",
    "Asia/Tel_Aviv": "Israel",
    "Asia/Jerusalem": "Israel",
    "Asia/Baghdad": "Iraq",
    "Asia/Tehran": "Iran",
    "Asia/Karachi": "Pakistan",
    # Europe
    "Europe/London": "United Kingdom",
    "Europe/Paris": "France",
    "Europe/Berlin": "Germany",
    "Europe/Rome": "Italy",
    "Europe/Madrid": "Spain",
    "Europe/Moscow": "Russia",
    "Europe/Istanbul": "Turkey",
    "Europe/Amsterdam": "Netherlands",
    "Europe/Brussels": "Belgium",
    "Europe/Zurich": "Switzerland",
    "Europe/Vienna": "Austria",
    "Europe/Stockholm": "Sweden",
    "Europe/Oslo": "Norway",
    "Europe/Copenhagen": "Denmark",
    "Europe/Helsinki": "Finland",
    "Europe/Warsaw": "Poland",
    "Europe/Prague": "Czech Republic",
    "Europe/Budapest": "Hungary",
    "Europe/Athens": "Greece",
    "Europe/Lisbon": "Portugal",
    "Europe/Dublin": "Ireland",
    "Europe/Kyiv": "Ukraine",
    "Europe/Kiev": "Ukraine",
    "Europe/Bucharest": "Romania",
    # Oceania
    "Australia/Sydney": "Australia",
    "Australia/Melbourne": "Australia",
    "Australia/Brisbane": "Australia",
    "Australia/Perth": "Australia",
    "Australia/Adelaide": "Australia",
    "Pacific/Auckland": "New Zealand",
    "Pacific/Fiji": "Fiji",
    "UTC": UNIVERSAL_TIME,
}

# Used when the zone database only knows a numeric name such as "+03".
ABBREVIATION_FALLBACKS: Final[dict[str, str]] = {
    "Africa/Nairobi": "EAT",
    "Europe/Lisbon": "WET",
    "Europe/Paris": "CET",
    "Europe/Athens": "EET",
    "Asia/Riyadh": "AST",
    "Asia/Dubai": "GST",
    "Asia/Kolkata": "IST",
    "Asia/Singapore": "SGT",
    "Asia/Shanghai": "CST",
    "Asia/Tokyo": "JST",
    "Asia/Seoul": "KST",
    "Australia/Sydney": "AEST",
    "America/Los_Angeles": "PST",
    "America/Denver": "MST",
    "America/Chicago": "CST",
    "America/New_York": "EST",
    "America/Sao_Paulo": "BRT",
}

POPULAR_ZONES: Final[tuple[str, ...]] = (
    "UTC",
    "America/New_York",
    "America/Los_Angeles",
    "Europe/London",
    "Europe/Paris",
    "Asia/Tokyo",
    "Asia/Dubai",
    "Asia/Singapore",
    "Australia/Sydney",
    "Asia/Kolkata",
    "America/Sao_Paulo",
    "Asia/Shanghai",
    "Europe/Moscow",
    "Asia/Hong_Kong",
    "America/Chicago",
    "America/Toronto",
    "Europe/Berlin",
)
