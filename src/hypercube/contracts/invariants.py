"""Formal model and writer invariants.

This file documents what each component MUST guarantee. It is a reviewer
anchor and system reference, not executable code.
"""

MODEL_INVARIANTS = {
    "coordinate": [
        "Latitude and longitude are stored at float32 precision",
        "Timestamps are timezone-aware (naive input is read as UTC)",
        "Tolerant equality: lat/lon within 1e-5, height within 1e-7",
        "Ordering: lat, lon, time, height; absent time/height sorts last",
    ],

    "variable": [
        "Every sample key carries exactly the fields of the shape kind",
        "Sample map is keyed by raw coordinate values (exact equality)",
        "'units' attribute is set at construction",
        "Attributes and samples only accumulate (no removal)",
    ],

    "vector": [
        "u and v share the same shape kind",
        "u.standard_name == 'eastward_<group>', v.standard_name == 'northward_<group>'",
    ],

    "dimensions": [
        "Latitude, longitude and height axes are sorted ascending",
        "Axes hold distinct raw values (exact, not tolerant, deduplication)",
        "Time records are the distinct populated timestamps, chronological",
    ],
}

WRITER_INVARIANTS = {
    "schema": [
        "Dataset i > 0 uses axis names suffixed with i (lat1, lon1, time1, zc1)",
        "Time axis is unlimited; height axis only exists when heights are used",
        "Plain -> (lat, lon); Time -> (time, lat, lon); TimeDepth -> (time, lat, lon, height)",
        "No declaration after commit",
    ],

    "data": [
        "Every variable is materialized over the dataset's full axes",
        "Missing samples become the configured sentinel (NaN by default)",
        "Every time variable gets one record per dataset timestamp",
        "Handle is flushed and closed on every exit path",
    ],
}
