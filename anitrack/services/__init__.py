"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases:
- aggregator: AniList first, Kitsu as fallback, one canonical shape
- normalizer: Kitsu records converted to the AniList shape
- episodes: episode listings and watch progress
- library: users, local anime, watchlists and favorites
- seeder: demo data for the local library

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
