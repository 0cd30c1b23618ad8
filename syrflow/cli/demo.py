# cli/demo.py   (внешний скрипт запуска)
"""Демонстрация калькулятора добегания на условной цепочке постов.

Расстояния и времена участков ниже иллюстративные, а не справочные.
"""

import logging
from datetime import datetime

from syrflow import RiverPost, PostType, RouteAnalyzer
from syrflow.history import get as get_history


def demo_posts() -> list:
    return [
        RiverPost("toktogul", "Токтогульская ГЭС", 0, 0, 0, post_type=PostType.HES),
        RiverPost("uchkurgan", "Учкурганская ГЭС", 1, 120, 120, 14, 20, post_type=PostType.HES),
        RiverPost("uchtepe", "г/п Учтепе", 2, 190, 70, 8, 12, post_type=PostType.GAUGE),
        RiverPost(
            "bakhri_tojik", "Бахри Точик", 3, 420, 230, 30, 42,
            is_reset_point=True, post_type=PostType.RESERVOIR,
        ),
        RiverPost("bekabad", "г/п Бекабад", 4, 480, 60, 8, 12, post_type=PostType.GAUGE),
        RiverPost("chinaz", "г/п Чиназ", 5, 610, 130, 18, 26, post_type=PostType.GAUGE),
        RiverPost("shardara", "Шардаринское вдхр", 6, 700, 90, 12, 18, post_type=PostType.RESERVOIR),
    ]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    routes = RouteAnalyzer(demo_posts(), history=get_history("memory"))

    for from_id, to_id, q in (
        ("toktogul", "uchtepe", 300),
        ("toktogul", "uchtepe", 600),
        ("toktogul", "bakhri_tojik", 300),
        ("uchkurgan", "shardara", 300),
        ("shardara", "toktogul", 300),
    ):
        result = routes.calculate(from_id, to_id, q)
        if not result:
            print(f"{from_id} -> {to_id}: {result.reason}")
            continue
        print(
            f"{from_id} -> {to_id} @ {q} м³/с: {result.distance_km:.0f} км, "
            f"{result.min_time_formatted} … {result.max_time_formatted} "
            f"(ср. {result.avg_time_formatted})"
        )

    release = datetime(2024, 4, 1, 8, 0)
    window = routes.arrival("bekabad", "shardara", release)
    print(f"Выпуск {release:%d.%m %H:%M} → приход {window.earliest:%d.%m %H:%M} … {window.latest:%d.%m %H:%M}")

    for record in routes.history.list():
        print(f"  история: {record.from_name} → {record.to_name}, {record.avg_time_formatted}")


if __name__ == "__main__":
    main()
