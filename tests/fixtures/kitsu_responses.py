"""
Mock Kitsu JSON:API responses for testing.

Bodies returned by https://kitsu.io/api/edge/anime, trimmed to the attributes
the normalizer reads.
"""

KITSU_ATTACK_ON_TITAN = {
    "id": "7442",
    "type": "anime",
    "attributes": {
        "synopsis": "Centuries ago, mankind was slaughtered to near extinction by monstrous humanoid creatures called titans.",
        "titles": {
            "en": "Attack on Titan",
            "en_jp": "Shingeki no Kyojin",
            "ja_jp": "進撃の巨人",
        },
        "canonicalTitle": "Attack on Titan",
        "averageRating": "84.84",
        "startDate": "2013-04-07",
        "endDate": "2013-09-28",
        "status": "finished",
        "posterImage": {
            "large": "https://media.kitsu.io/anime/poster_images/7442/large.jpg",
        },
        "coverImage": {
            "large": "https://media.kitsu.io/anime/cover_images/7442/large.jpg",
        },
        "episodeCount": 25,
    },
}

KITSU_COWBOY_BEBOP = {
    "id": "1",
    "type": "anime",
    "attributes": {
        "synopsis": "In the year 2071, humanity has colonized several of the planets.",
        "titles": {"en": "Cowboy Bebop", "en_jp": "Cowboy Bebop"},
        "canonicalTitle": "Cowboy Bebop",
        "averageRating": "8.2",
        "startDate": "1998-04-03",
        "endDate": "1999-04-24",
        "status": "finished",
        "posterImage": {"large": "https://media.kitsu.io/anime/poster_images/1/large.jpg"},
        "coverImage": None,
        "episodeCount": 26,
    },
}

KITSU_LIST_RESPONSE = {
    "data": [KITSU_ATTACK_ON_TITAN, KITSU_COWBOY_BEBOP],
    "meta": {"count": 2},
    "links": {},
}

KITSU_DETAIL_RESPONSE = {"data": KITSU_ATTACK_ON_TITAN}

KITSU_DETAIL_WITH_GENRES_RESPONSE = {
    "data": KITSU_ATTACK_ON_TITAN,
    "included": [
        {"id": "1", "type": "genres", "attributes": {"name": "Action"}},
        {"id": "5", "type": "genres", "attributes": {"name": "Drama"}},
        {"id": "8", "type": "categories", "attributes": {"title": "Military"}},
    ],
}

KITSU_NOT_FOUND_RESPONSE = {
    "errors": [{"title": "Record not found", "detail": "The record identified by 999999 could not be found.", "code": "404", "status": "404"}]
}
