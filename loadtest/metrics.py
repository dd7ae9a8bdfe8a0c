import json
import time
from collections import Counter
from datetime import datetime
from pathlib import Path

import psutil


class LoadMetrics:
    def __init__(self, scenario_name):
        self.scenario_name = scenario_name
        self.start_time = None
        self.end_time = None
        self.requests = 0
        self.successful_requests = 0
        self.failed_requests = 0
        self.latencies = []
        self.server_times = []
        self.strengths = Counter()
        self.cpu_samples = []
        self.memory_samples = []
        self.process = psutil.Process()

    def start(self):
        self.start_time = time.time()
        self.requests = 0
        self.successful_requests = 0
        self.failed_requests = 0
        self.latencies = []
        self.server_times = []
        self.strengths = Counter()

    def record_request(self, success, latency_ms, strength=None, server_time_ms=None):
        self.requests += 1
        self.latencies.append(latency_ms)

        if success:
            self.successful_requests += 1
            if strength:
                self.strengths[strength] += 1
            if server_time_ms is not None:
                self.server_times.append(server_time_ms)
        else:
            self.failed_requests += 1

    def sample_resources(self):
        try:
            self.cpu_samples.append(self.process.cpu_percent())
            self.memory_samples.append(
                self.process.memory_info().rss / 1024 / 1024
            )  # MB
        except psutil.Error:
            pass

    def stop(self):
        self.end_time = time.time()

    @staticmethod
    def _mean(values):
        return round(sum(values) / len(values), 2) if values else 0

    def get_report(self):
        total_time = self.end_time - self.start_time if self.end_time else 0

        return {
            "scenario": self.scenario_name,
            "timestamp": datetime.now().isoformat(),
            "total_requests": self.requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "total_time_seconds": round(total_time, 2),
            "requests_per_second": (
                round(self.requests / total_time, 2) if total_time > 0 else 0
            ),
            "success_rate": (
                round(self.successful_requests / self.requests * 100, 2)
                if self.requests > 0
                else 0
            ),
            "avg_latency_ms": self._mean(self.latencies),
            "min_latency_ms": min(self.latencies) if self.latencies else 0,
            "max_latency_ms": max(self.latencies) if self.latencies else 0,
            "avg_generation_ms": self._mean(self.server_times),
            "strength_distribution": dict(self.strengths),
            "avg_cpu_percent": self._mean(self.cpu_samples),
            "avg_memory_mb": self._mean(self.memory_samples),
        }

    def save_report(self, output_dir="results"):
        Path(output_dir).mkdir(exist_ok=True)
        report = self.get_report()

        filename = f"{output_dir}/{self.scenario_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        with open(filename, "w") as f:
            json.dump(report, f, indent=2)

        print(f"Report saved: {filename}")
        return report
