from src.models.animal import AnimalStatus, AnimalType, Gender

# UI chip colour per status; must cover every AnimalStatus member
STATUS_COLORS = {
    AnimalStatus.ACTIVE: "success",
    AnimalStatus.SOLD: "warning",
    AnimalStatus.DEAD: "error",
    AnimalStatus.OTHER: "default",
}


def status_color(status: AnimalStatus) -> str:
    return STATUS_COLORS[AnimalStatus(status)]


def _zero_filled(enum, counts: dict[str, int]) -> dict[str, int]:
    # rows with values outside the enum are ignored
    return {member.value: int(counts.get(member.value, 0)) for member in enum}


def build_summary(
    type_counts: dict[str, int],
    status_counts: dict[str, int],
    gender_counts: dict[str, int],
) -> dict:
    """
    Turn raw per-column counts into the dashboard summary.

    Every enum member is present in the output, with 0 when no animal has
    that value.

    Args:
        type_counts: {type: count}
        status_counts: {status: count}
        gender_counts: {gender: count}

    Returns:
        dict: total, by_type, by_status (with display colour) and by_gender
    """
    by_type = _zero_filled(AnimalType, type_counts)
    statuses = _zero_filled(AnimalStatus, status_counts)

    return {
        "total": sum(by_type.values()),
        "by_type": by_type,
        "by_status": [
            {
                "status": status,
                "count": count,
                "color": status_color(AnimalStatus(status)),
            }
            for status, count in statuses.items()
        ],
        "by_gender": _zero_filled(Gender, gender_counts),
    }
