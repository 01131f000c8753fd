from notesite_kit.observability import InMemoryMetricsHook, NoOpMetricsHook, names


def test_in_memory_hook_aggregates_values() -> None:
    hook = InMemoryMetricsHook()

    hook.increment(names.RENDER_PAGES_TOTAL, 2)
    hook.increment(names.RENDER_PAGES_TOTAL, labels={"kind": "index"})
    hook.record_latency(names.RENDER_DURATION, 1.5)
    hook.record_gauge(names.BUILD_SOURCES, 3)
    hook.record_gauge(names.BUILD_SOURCES, 4)

    assert hook.counters[names.RENDER_PAGES_TOTAL] == 3
    assert hook.latencies[names.RENDER_DURATION] == [1.5]
    assert hook.gauges[names.BUILD_SOURCES] == 4


def test_noop_hook_accepts_every_call() -> None:
    hook = NoOpMetricsHook()

    hook.increment(names.PARSE_DOCUMENTS_TOTAL)
    hook.record_latency(names.PARSE_DURATION, 0.1, labels={"source": "a.md"})
    hook.record_gauge(names.BUILD_SOURCES, 1.0)
