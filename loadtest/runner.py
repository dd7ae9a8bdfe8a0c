import time

from .client import PassgenClient, RetryableError, ValidationFailed
from .metrics import LoadMetrics
from .scenario import LoadScenario


class LoadRunner:
    def __init__(self, client: PassgenClient):
        self.client = client

    def run(self, scenario: LoadScenario, metrics: LoadMetrics):
        """
        Fire ``scenario.requests`` generation requests and record each outcome

        Args:
            scenario: LoadScenario describing length, options and pacing
            metrics: LoadMetrics object for data collection

        Returns the stats reported by the server after the run.
        """
        print(f"🚀 Running '{scenario.name}': {scenario.requests} requests, length {scenario.length}")

        if scenario.clear_before:
            self.client.clear()

        metrics.start()

        for i in range(1, scenario.requests + 1):
            if scenario.max_time and time.time() - metrics.start_time > scenario.max_time:
                print(f"⏱️  Time limit reached after {i - 1} requests")
                break

            start = time.time()
            try:
                result = self.client.generate(scenario.length, scenario.options)
                latency = int((time.time() - start) * 1000)
                metrics.record_request(
                    True,
                    latency,
                    strength=result["strength"],
                    server_time_ms=result["response_time"],
                )
            except ValidationFailed as e:
                print(f"❌ Rejected: {e.error}")
                metrics.record_request(False, int((time.time() - start) * 1000))
                break
            except RetryableError as e:
                print(f"⚠️  Retryable error at request #{i}: {e}")
                metrics.record_request(False, int((time.time() - start) * 1000))

            if i % 10 == 0:
                metrics.sample_resources()

            if i % 100 == 0:
                print(f"   ... {i}/{scenario.requests} requests")

            if scenario.delay > 0:
                time.sleep(scenario.delay)

        metrics.stop()
        return self.client.stats()
