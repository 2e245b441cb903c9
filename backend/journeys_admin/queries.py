"""
Journeys Admin Backend — GraphQL Documents

Static queries and mutations against the `locations` table.
"""

GET_ALL_ACTIVE_LOCATIONS = """
query GetAllActiveLocations {
  locations(where: {is_active: {_eq: true}}, order_by: {name: asc}) {
    id
    name
    hero_image
    city
    state
    stamp {
      stamp_image
    }
  }
}
"""

SET_LOCATION_TO_INACTIVE = """
mutation SetLocationToInactive($location: uuid!) {
  update_locations(where: {id: {_eq: $location}}, _set: {is_active: false}) {
    returning {
      id
      name
      is_active
    }
  }
}
"""

SET_LOCATION_GEOFENCE_RADIUS = """
mutation SetLocationGeofenceRadius($location: uuid!, $radius: Int!) {
  update_locations(where: {id: {_eq: $location}}, _set: {geofence_radius: $radius}) {
    returning {
      id
      name
      geofence_radius
    }
  }
}
"""

SET_LOCATION_COORDINATES = """
mutation SetLocationCoordinates($location: uuid!, $latitude: float8!, $longitude: float8!) {
  update_locations(
    where: {id: {_eq: $location}},
    _set: {latitude: $latitude, longitude: $longitude}
  ) {
    returning {
      id
      name
      latitude
      longitude
    }
  }
}
"""
