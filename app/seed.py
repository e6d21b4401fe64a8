import logging

from sqlalchemy.orm import Session

from app.crud import crud_summer_houses

logger = logging.getLogger("voting.seed")

SAMPLE_SUMMER_HOUSES = [
    {
        "name": "Rudkøbing - Totalrenoveret byhus med spa",
        "image_url": "https://picture.feline.dk/get/a9821af3-f71c-4829-86b4-e6e5bc3d72fb_1_w500h375ac1fs1kar1rb1.jpg?v2",
        "booking_url": "https://www.dansk-sommerhusferie.dk/sommerhussoegning/Y2d5m-iya_rK6949Dq6Nt1aY_hJjY2Jwfu9yrkK5gAEEFJjBFJABxA5bWAA/557-LL249?sortorder=Price",
    },
    {
        "name": "Haderslev 1 - Luksuriøst sommerhus nær strand",
        "image_url": "https://picture.feline.dk/get/f989adaf-37d1-405e-8589-51eb57c85a16_9_w500h375ac1fs1kar1rb1.jpg?v2",
        "booking_url": "https://www.dansk-sommerhusferie.dk/sommerhussoegning/Y2cpvDxPVW1pjsPK5mBpp_gZPGJsTAzO713OVSgXMIDAkVsMDArMYCaQAcQOW1gA/Map/x134.85942245573398y80.5629070301312z10/160-C2190",
    },
    {
        "name": "Haderslev 2 - Tapagervej, Hejlsminde",
        "image_url": "https://picture.feline.dk/get/d008a480-fb48-4079-b6c5-4ecaa88a7b3a_1_w500h375ac1fs1kar1rb1.jpg?v2",
        "booking_url": "https://www.dansk-sommerhusferie.dk/sommerhussoegning/Y2cpvDxPVW1pjsPK5mBpp_gZPGJsTAzO713OVSgXMIDAkVsMDArMYCaQAcQOW1gA/Map/x134.84521132653958y80.56731331389582z9/090-53139",
    },
    {
        "name": "Haderslev 3 - Moderne sommerhus nær strand",
        "image_url": "https://picture.feline.dk/get/bb3827ed-0eee-4dd5-bd4d-211cc61a73ef_9_w500h375ac1fs1kar1rb1.jpg?v2",
        "booking_url": "https://www.dansk-sommerhusferie.dk/sommerhussoegning/Y2cpvDxPVW1pjsPK5mBpp_gZPGJsTAzO713OVSgXMIDAkVsMDArMYCaQAcQOW1gA/Map/x134.84521132653958y80.56731331389582z9/160-C2156",
    },
    {
        "name": "Bagenkop - Hyggeligt og rummeligt feriehus",
        "image_url": "https://picture.feline.dk/get/9ab281d5-1b76-4dfd-9583-43bad54a4921_7_w500h375ac1fs1kar1rb1.jpg?v2",
        "booking_url": "https://www.sommerhus-siden.dk/sommerhussoegning/Y2V5m-iya_rK6949Dq6Nt1aY_hJjY2Jwfu9yrkK5gIGBQYFBgRlIMQAA/130-G10937?sortorder=Price",
    },
    {
        "name": "Christiansfeld - Svensk sommerhus nær natur",
        "image_url": "https://picture.feline.dk/get/fd9782c9-2120-496f-bda7-80c9d447c7d6_3_w500h375ac1fs1kar1rb1.jpg?v2",
        "booking_url": "https://www.dansk-sommerhusferie.dk/sommerhussoegning/Y2cpvDxPVW1pjsPK5mBpp_gZPGJsTAzO713OVSgXMIDAkVsMDArMYCaQAcQOW1gA/Map/x134.82268935388333y80.53432983201182z9/130-F04123",
    },
]


def seed_summer_houses(db: Session) -> int:
    """Заполняет каталог, только если он пуст. Возвращает число созданных домов"""
    if crud_summer_houses.count_summer_houses(db) > 0:
        logger.info("Catalogue already seeded, skipping")
        return 0

    created = crud_summer_houses.create_summer_houses(db, SAMPLE_SUMMER_HOUSES)
    for house in created:
        logger.info("Created summer house: %s", house.name)
    return len(created)
