"""
BusMetrics: Tracks simple statistics for EventBus traffic.
"""


class BusMetrics:
    """
    Tracks metrics for published and delivered events.

    Attributes:
        published (int): Total number of events published.
        delivered (int): Number of events handed out by poll().
        by_topic (dict): Published count per topic.
    """

    def __init__(self):
        """Initialize all counters to zero."""
        self.published = 0
        self.delivered = 0
        self.by_topic = {}

    def record_publish(self, topic: str) -> None:
        self.published += 1
        self.by_topic[topic] = self.by_topic.get(topic, 0) + 1

    def record_delivery(self, count: int) -> None:
        self.delivered += count

    def report(self) -> dict:
        """
        Return a snapshot of current metrics.

        Returns:
            dict: Dictionary containing 'published', 'delivered' and 'by_topic' counters.
        """
        return {
            "published": self.published,
            "delivered": self.delivered,
            "by_topic": dict(self.by_topic),
        }
