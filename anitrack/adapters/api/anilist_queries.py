"""
Requetes GraphQL AniList.

Les requetes liste partagent le meme jeu de champs (MEDIA_FIELDS) ; la requete
detail y ajoute la saison, les dates de diffusion, la duree et la source.
"""

MEDIA_FIELDS = """
        id
        title {
          english
          romaji
          native
        }
        coverImage {
          large
        }
        bannerImage
        description
        episodes
        status
        genres
        averageScore
        studios {
          nodes {
            name
          }
        }
"""

DETAIL_FIELDS = MEDIA_FIELDS + """
        season
        seasonYear
        startDate {
          year
          month
          day
        }
        endDate {
          year
          month
          day
        }
        duration
        source
"""

TRENDING_QUERY = """
  query {
    Page(page: 1, perPage: 12) {
      media(sort: TRENDING_DESC, type: ANIME) {%s
        season
        seasonYear
      }
    }
  }
""" % MEDIA_FIELDS

SEASONAL_QUERY = """
  query ($season: MediaSeason!, $year: Int!) {
    Page(page: 1, perPage: 12) {
      media(season: $season, seasonYear: $year, sort: POPULARITY_DESC, type: ANIME) {%s
      }
    }
  }
""" % MEDIA_FIELDS

POPULAR_QUERY = """
  query {
    Page(page: 1, perPage: 12) {
      media(sort: POPULARITY_DESC, type: ANIME) {%s
      }
    }
  }
""" % MEDIA_FIELDS

SEARCH_QUERY = """
  query ($search: String!) {
    Page(page: 1, perPage: 20) {
      media(search: $search, type: ANIME) {%s
      }
    }
  }
""" % MEDIA_FIELDS

DETAIL_QUERY = """
  query ($id: Int!) {
    Media(id: $id, type: ANIME) {%s
    }
  }
""" % DETAIL_FIELDS

GENRES_QUERY = """
  query {
    GenreCollection
  }
"""

ANIME_BY_GENRE_QUERY = """
  query ($genre: String!, $page: Int) {
    Page(page: $page, perPage: 20) {
      pageInfo {
        hasNextPage
      }
      media(genre_in: [$genre], sort: POPULARITY_DESC, type: ANIME) {%s
      }
    }
  }
""" % DETAIL_FIELDS
