#!/usr/bin/env python3
import sys

from loadtest.client import PassgenClient, RetryableError
from loadtest.metrics import LoadMetrics
from loadtest.runner import LoadRunner
from loadtest.scenario import DEFAULT_SCENARIOS

# Configuration
BASE_URL = "http://127.0.0.1:5000"


def run_scenario(runner, scenario):
    """Runs one scenario and saves its report"""
    print(f"\n{'='*60}")
    print(f"🧪 SCENARIO: {scenario.name}")
    print(f"{'='*60}")

    metrics = LoadMetrics(scenario.name)
    stats = runner.run(scenario, metrics)

    report = metrics.save_report()
    print(f"\n📈 Results:")
    print(f"   - Requests: {report['total_requests']}")
    print(f"   - Time: {report['total_time_seconds']}s")
    print(f"   - Speed: {report['requests_per_second']} req/s")
    print(f"   - Avg generation: {report['avg_generation_ms']} ms")
    print(f"   - Strengths: {report['strength_distribution']}")
    print(f"   - Retained history: {stats['total_generated']}/{stats['history_cap']}")

    return report


def main():
    """Runs all default scenarios"""
    runner = LoadRunner(PassgenClient(BASE_URL))

    print("🚀 STARTING LOAD TEST")
    print("=" * 60)

    all_reports = []
    for scenario in DEFAULT_SCENARIOS:
        try:
            all_reports.append(run_scenario(runner, scenario))
        except KeyboardInterrupt:
            print("\n⚠️  User interruption")
            sys.exit(0)
        except RetryableError as e:
            print(f"❌ Server unavailable: {e}")

    print("\n" + "=" * 60)
    print("✅ ALL SCENARIOS COMPLETED")
    print(f"📊 {len(all_reports)} reports generated in /results")


if __name__ == "__main__":
    main()
