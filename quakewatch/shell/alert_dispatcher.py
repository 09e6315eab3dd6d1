"""Alert Dispatcher - Imperative Shell.

Applies an alert plan to the presentation capabilities: one cue per cycle,
one spoken announcement per novel earthquake, one headline for the most
recent one. A failing capability is logged and does not stop the rest.
"""

import logging

from quakewatch.core.alerts import AlertPlan, plan_alerts
from quakewatch.core.earthquake import Earthquake
from quakewatch.shell.capabilities import (
    AlertSink,
    CuePlayer,
    NullCuePlayer,
    NullSpeaker,
    Speaker,
)


logger = logging.getLogger(__name__)


class AlertDispatcher:
    """Sends alert requests to injected capabilities."""

    def __init__(
        self,
        cue_player: CuePlayer | None = None,
        speaker: Speaker | None = None,
        alert_sink: AlertSink | None = None,
    ) -> None:
        self.cue_player = cue_player or NullCuePlayer()
        self.speaker = speaker or NullSpeaker()
        self.alert_sink = alert_sink

    def dispatch(self, novel: list[Earthquake]) -> AlertPlan:
        """Request alerts for the novel earthquakes of one cycle.

        Args:
            novel: Novel earthquakes in fetch order

        Returns:
            The plan that was dispatched
        """
        plan = plan_alerts(novel)
        if plan.is_empty:
            return plan

        logger.info("Dispatching alerts for %d new earthquakes", len(plan.announcements))

        if plan.play_cue:
            try:
                self.cue_player.play_cue()
            except Exception as e:
                logger.error("Failed to play alert cue: %s", str(e))

        for announcement in plan.announcements:
            if self.alert_sink is not None:
                try:
                    self.alert_sink.on_announcement(announcement)
                except Exception as e:
                    logger.error("Alert sink rejected announcement: %s", str(e))

            try:
                self.speaker.speak(announcement.text)
            except Exception as e:
                logger.error(
                    "Failed to speak announcement for %s: %s",
                    announcement.earthquake_id,
                    str(e),
                )

        if plan.headline is not None and self.alert_sink is not None:
            try:
                self.alert_sink.on_headline(plan.headline)
            except Exception as e:
                logger.error("Alert sink rejected headline: %s", str(e))

        return plan

    def cancel(self) -> None:
        """Cancel any in-flight spoken announcement."""
        try:
            self.speaker.cancel()
        except Exception as e:
            logger.error("Failed to cancel speech: %s", str(e))
