"""Consultas GraphQL fijas del API de Ackee.

`limit`, `days` y el tipo de evento van interpolados en el texto porque el
esquema de Ackee los declara como literales de argumento; el rango viaja
como variable `$range`.
"""

from __future__ import annotations

CREATE_TOKEN = """
mutation createToken($input: CreateTokenInput!) {
  createToken(input: $input) {
    payload {
      id
    }
  }
}
"""

GET_DOMAINS = """
query getDomains {
  domains {
    id
    title
  }
}
"""

_DOMAIN_TEMPLATE = """
query getDomain($id: ID!, $range: Range!) {{
  domain(id: $id) {{
    id
    title
    facts {{
      averageViews {{
        count
      }}
      averageDuration {{
        count
      }}
      viewsMonth
      viewsYear
      viewsToday
    }}
    statistics {{
      views(interval: DAILY, type: UNIQUE, limit: {days}) {{
        count
        id: value
      }}
      pages(sorting: TOP, limit: {limit}, range: $range) {{
        count
        id: value
      }}
      referrers(sorting: TOP, limit: {limit}, range: $range, type: WITH_SOURCE) {{
        count
        id: value
      }}
      languages(sorting: TOP, limit: {limit}, range: $range) {{
        count
        id: value
      }}
      browsers(sorting: TOP, type: WITH_VERSION, limit: {limit}, range: $range) {{
        count
        id: value
      }}
      devices(sorting: TOP, type: WITH_MODEL, limit: {limit}, range: $range) {{
        count
        id: value
      }}
      sizes(sorting: TOP, type: SCREEN_RESOLUTION, limit: {limit}, range: $range) {{
        count
        id: value
      }}
      systems(sorting: TOP, type: NO_VERSION, limit: {limit}, range: $range) {{
        count
        id: value
      }}
    }}
  }}
}}
"""

_EVENTS_TEMPLATE = """
query getEvents($range: Range!) {{
  events {{
    id
    title
    statistics {{
      list(sorting: TOP, type: {event_type}, range: $range, limit: {limit}) {{
        id: value
        count
      }}
    }}
  }}
}}
"""


def domain_query(*, days: int, limit: int) -> str:
    return _DOMAIN_TEMPLATE.format(days=int(days), limit=int(limit))


def events_query(*, event_type: str, limit: int) -> str:
    return _EVENTS_TEMPLATE.format(event_type=event_type, limit=int(limit))
