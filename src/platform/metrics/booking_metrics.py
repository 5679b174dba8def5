from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Booking Engine Core Metrics Collector

    Tracks reservation outcomes (how often seats are lost to a concurrent
    booking) and cancellation outcomes.
    """

    def __init__(self) -> None:
        # ========== Reservation Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking (seat reservation) attempts',
            ['result'],  # result: confirmed / error code
        )

        self.booking_duration = Histogram(
            'booking_duration_seconds',
            'Seat reservation transaction duration',
            ['result'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
        )

        self.seats_reserved = Counter(
            'booking_seats_reserved_total', 'Seats flipped to unavailable by confirmed bookings'
        )

        # ========== Cancellation Metrics ==========
        self.cancellation_requests = Counter(
            'booking_cancellation_requests_total',
            'Total booking cancellation attempts',
            ['result'],
        )

        self.seats_released = Counter(
            'booking_seats_released_total', 'Seats returned to the pool by cancellations'
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float, seat_count: int = 0) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.labels(result=result).observe(duration)
        if seat_count:
            self.seats_reserved.inc(seat_count)

    def record_cancellation(self, *, result: str, seat_count: int = 0) -> None:
        self.cancellation_requests.labels(result=result).inc()
        if seat_count:
            self.seats_released.inc(seat_count)


# Global metrics instance
metrics = BookingMetrics()
