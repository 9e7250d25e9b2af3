import asyncio
import threading

from app.core.events import (
    ChangeFeed,
    PROJECTS_TOPIC,
    history_topic,
    reports_topic,
    topics_for_project,
)


def test_topics_for_project():
    assert topics_for_project(7) == [PROJECTS_TOPIC, "reports:7", "history:7"]
    assert reports_topic(7) == "reports:7"
    assert history_topic(7) == "history:7"


def test_publish_wakes_only_matching_subscribers():
    async def scenario():
        feed = ChangeFeed()
        projects = feed.subscribe(PROJECTS_TOPIC)
        reports = feed.subscribe(reports_topic(1))
        feed.publish(PROJECTS_TOPIC)
        topic = await asyncio.wait_for(projects.get(), timeout=1)
        await asyncio.sleep(0)
        return topic, reports.empty()

    topic, reports_empty = asyncio.run(scenario())
    assert topic == PROJECTS_TOPIC
    assert reports_empty


def test_publish_from_worker_thread():
    async def scenario():
        feed = ChangeFeed()
        queue = feed.subscribe(history_topic(3))
        worker = threading.Thread(target=feed.publish, args=(history_topic(3),))
        worker.start()
        worker.join()
        return await asyncio.wait_for(queue.get(), timeout=1)

    assert asyncio.run(scenario()) == "history:3"


def test_full_queue_drops_extra_wakeups():
    async def scenario():
        feed = ChangeFeed(max_queue_size=1)
        queue = feed.subscribe(PROJECTS_TOPIC)
        feed.publish(PROJECTS_TOPIC)
        feed.publish(PROJECTS_TOPIC)
        await asyncio.sleep(0)
        return queue.qsize()

    assert asyncio.run(scenario()) == 1


def test_unsubscribe():
    async def scenario():
        feed = ChangeFeed()
        first = feed.subscribe(PROJECTS_TOPIC)
        second = feed.subscribe(PROJECTS_TOPIC)
        assert feed.subscriber_count(PROJECTS_TOPIC) == 2
        feed.unsubscribe(PROJECTS_TOPIC, first)
        assert feed.subscriber_count(PROJECTS_TOPIC) == 1
        feed.unsubscribe(PROJECTS_TOPIC, second)
        return feed.subscriber_count(PROJECTS_TOPIC)

    assert asyncio.run(scenario()) == 0
