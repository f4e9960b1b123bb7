BOOKING_FIELDS = """
  id
  startTime
  endTime
  status
  totalPrice
  notes
  cancelReason
  createdAt
  updatedAt
  user { id firstName lastName email phone }
  barber { id firstName lastName email phone }
  barberShop { id name city }
  managementService { id name description price durationMinutes isActive category { name } }
"""

SHOP_FIELDS = """
  id
  name
  address
  city
  isActive
  barbers { id firstName lastName email phone isActive }
  services { id name description price durationMinutes isActive category { name } }
"""

RATING_FIELDS = """
  id
  rating
  comment
  createdAt
  rater { id firstName lastName }
"""

LOGIN = """
mutation Login($email: String!, $password: String!) {
  login(email: $email, password: $password) {
    token
    refreshToken
    expiresIn
    user { id email firstName lastName role }
    barber { id email firstName lastName role }
  }
}
"""

CREATE_BOOKING = f"""
mutation CreateBooking($input: CreateBookingInput!) {{
  createBooking(input: $input) {{ {BOOKING_FIELDS} }}
}}
"""

UPDATE_BOOKING_STATUS = f"""
mutation UpdateBookingStatus($id: ID!, $status: BookingStatus!, $reason: String) {{
  updateBookingStatus(id: $id, status: $status, reason: $reason) {{ {BOOKING_FIELDS} }}
}}
"""

RESCHEDULE_BOOKING = f"""
mutation RescheduleBooking($id: ID!, $newStartTime: String!) {{
  rescheduleBooking(id: $id, newStartTime: $newStartTime) {{ {BOOKING_FIELDS} }}
}}
"""

BOOKINGS_BY_USER = f"""
query GetBookingsByUser($userId: ID!) {{
  bookingsByUser(userId: $userId) {{ {BOOKING_FIELDS} }}
}}
"""

BOOKINGS_BY_BARBER = f"""
query GetBookingsByBarber($barberId: ID!) {{
  bookingsByBarber(barberId: $barberId) {{ {BOOKING_FIELDS} }}
}}
"""

UPCOMING_BOOKINGS = f"""
query GetUpcomingBookings($userId: ID!) {{
  upcomingBookings(userId: $userId) {{ {BOOKING_FIELDS} }}
}}
"""

UPCOMING_BOOKINGS_BY_BARBER = f"""
query GetUpcomingBookingsByBarber($barberId: ID!) {{
  upcomingBookingsByBarber(barberId: $barberId) {{ {BOOKING_FIELDS} }}
}}
"""

OWNER_APPOINTMENTS = f"""
query GetOwnerAppointmentsWithFilters(
  $ownerId: ID!
  $barberShopId: ID
  $barberId: ID
  $status: BookingStatus
  $startDate: String
  $endDate: String
) {{
  ownerAppointmentsWithFilters(
    ownerId: $ownerId
    barberShopId: $barberShopId
    barberId: $barberId
    status: $status
    startDate: $startDate
    endDate: $endDate
  ) {{ {BOOKING_FIELDS} }}
}}
"""

BARBER_SHOP = f"""
query GetBarberShopDetails($id: ID!) {{
  barberShop(id: $id) {{ {SHOP_FIELDS} }}
}}
"""

OWNER_BARBER_SHOPS = f"""
query GetOwnerBarberShops($ownerId: ID!) {{
  getOwnerBarberShops(ownerId: $ownerId) {{ {SHOP_FIELDS} }}
}}
"""

IS_FAVORITE = """
query CheckIsFavorite($userId: ID!, $shopId: ID!) {
  isFavorite(userId: $userId, shopId: $shopId)
}
"""

ADD_TO_FAVORITES = """
mutation AddToFavorites($userId: ID!, $shopId: ID!) {
  addToFavorites(userId: $userId, shopId: $shopId) { id createdAt }
}
"""

REMOVE_FROM_FAVORITES = """
mutation RemoveFromFavorites($userId: ID!, $shopId: ID!) {
  removeFromFavorites(userId: $userId, shopId: $shopId)
}
"""

RATINGS_BY_ENTITY = f"""
query GetRatingsByEntity($entityId: ID!, $entityType: RatedType!) {{
  ratingsByEntity(entityId: $entityId, entityType: $entityType) {{ {RATING_FIELDS} }}
}}
"""

CREATE_USER_RATING = f"""
mutation CreateUserRating(
  $userId: ID!
  $entityId: ID!
  $entityType: RatedType!
  $rating: Int!
  $comment: String
  $bookingId: ID
) {{
  createUserRating(
    userId: $userId
    entityId: $entityId
    entityType: $entityType
    rating: $rating
    comment: $comment
    bookingId: $bookingId
  ) {{ {RATING_FIELDS} }}
}}
"""

UPDATE_RATING = f"""
mutation UpdateRating($id: ID!, $rating: Int!, $comment: String) {{
  updateRating(id: $id, rating: $rating, comment: $comment) {{ {RATING_FIELDS} }}
}}
"""

DELETE_RATING = """
mutation DeleteRating($id: ID!) {
  deleteRating(id: $id)
}
"""
