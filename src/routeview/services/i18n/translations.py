"""User-facing strings in the supported languages."""

from __future__ import annotations

from typing import Dict

DEFAULT_LANGUAGE = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "optimized_route_map": "Optimized Route Map",
        "page": "Page",
        "showing": "Showing:",
        "customer": "Customer",
        "customers": "customers",
        "show_all": "Show All",
        "starting_point_marker": "Start",
        "coordinate": "Coordinate:",
        "select_valid_json": "Please select a valid JSON file",
        "missing_required_fields": "Missing required fields in JSON file (startLatitude, startLongitude, customers)",
        "incorrect_data_types": "Incorrect data types in JSON file",
        "at_least_one_customer": "At least one customer is required",
        "customer_fields_required": "myId, latitude, longitude required",
        "customer_data_types_incorrect": "data types incorrect (must be numbers)",
        "json_read_error": "JSON file read error:",
        "unknown_error": "Unknown error",
        "api_error": "API Error:",
        "session_not_found": "Result not found or expired",
    },
    "tr": {
        "optimized_route_map": "Optimize Edilmiş Rota Haritası",
        "page": "Sayfa",
        "showing": "Gösterilen:",
        "customer": "Müşteri",
        "customers": "müşteri",
        "show_all": "Tümünü Göster",
        "starting_point_marker": "Başlangıç",
        "coordinate": "Koordinat:",
        "select_valid_json": "Lütfen geçerli bir JSON dosyası seçin",
        "missing_required_fields": "JSON dosyasında gerekli alanlar eksik (startLatitude, startLongitude, customers)",
        "incorrect_data_types": "JSON dosyasındaki veri tipleri hatalı",
        "at_least_one_customer": "En az bir müşteri gerekli",
        "customer_fields_required": "myId, latitude, longitude gerekli",
        "customer_data_types_incorrect": "veri tipleri hatalı (sayı olmalı)",
        "json_read_error": "JSON dosyası okuma hatası:",
        "unknown_error": "Bilinmeyen hata",
        "api_error": "API Hatası:",
        "session_not_found": "Sonuç bulunamadı veya süresi doldu",
    },
}


def get_translations(language: str | None) -> Dict[str, str]:
    """Return the string table for ``language``, falling back to English."""
    if not language:
        return TRANSLATIONS[DEFAULT_LANGUAGE]
    return TRANSLATIONS.get(language.lower(), TRANSLATIONS[DEFAULT_LANGUAGE])
