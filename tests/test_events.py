import logging

from catris.game import EventBus, GameOver, ScoreChanged, StateChanged


def test_typed_and_wildcard_subscribers():
    bus = EventBus()
    scores, everything = [], []
    bus.subscribe(scores.append, ScoreChanged)
    bus.subscribe(everything.append)
    bus.publish(ScoreChanged(100))
    bus.publish(StateChanged("tick"))
    assert scores == [ScoreChanged(100)]
    assert everything == [ScoreChanged(100), StateChanged("tick")]


def test_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(seen.append, GameOver)
    unsubscribe()
    unsubscribe()
    bus.publish(GameOver(0, "top-out"))
    assert seen == []


def test_failing_observer_is_isolated(caplog):
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("speaker on fire")

    bus.subscribe(broken, ScoreChanged)
    bus.subscribe(seen.append, ScoreChanged)
    with caplog.at_level(logging.ERROR, logger="catris.game.events"):
        bus.publish(ScoreChanged(300))
    assert seen == [ScoreChanged(300)]
    assert "speaker on fire" in caplog.text
