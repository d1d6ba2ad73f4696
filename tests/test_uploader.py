"""Tests for the bounded parallel uploader."""

import threading
import time

import pytest
import requests
from rich.console import Console

from fieldagent.errors import FileReadError, RemoteRejectionError, TransportError, WorkflowError
from fieldagent.models import FileUpload
from fieldagent.upload import (
    FileUploader,
    UploadJob,
    failed_results,
    jobs_for_uploads,
    summarize_results,
)


def _job(path, n: int, headers=None) -> UploadJob:
    return UploadJob(
        destination_url=f"https://storage.example.com/slot-{n}",
        local_path=path,
        headers=headers or {"Content-MD5": f"md5-{n}"},
    )


class TestUploadFiles:
    """Tests for FileUploader.upload_files()."""

    def test_zero_jobs_returns_empty_without_requests(self, recording_put):
        """An empty batch makes no network calls."""
        results = FileUploader().upload_files([])
        assert results == []
        assert recording_put.calls == []

    def test_three_jobs_all_succeed(self, recording_put, make_file):
        """Every accepted PUT produces a success result."""
        jobs = [_job(make_file(f"f{i}.txt"), i) for i in range(3)]

        results = FileUploader().upload_files(jobs)

        assert len(results) == 3
        assert all(r.ok for r in results)
        assert all(r.status_code == 200 and r.error is None for r in results)
        assert {r.job for r in results} == set(jobs)

    def test_missing_file_fails_only_that_job(self, recording_put, make_file, tmp_path):
        """A missing local file is recorded against its job; the others still upload."""
        jobs = [
            _job(make_file("one.txt"), 1),
            _job(tmp_path / "missing.txt", 2),
            _job(make_file("three.txt"), 3),
        ]

        results = {r.job.destination_url: r for r in FileUploader().upload_files(jobs)}

        assert len(results) == 3
        assert results["https://storage.example.com/slot-1"].ok
        assert results["https://storage.example.com/slot-3"].ok
        failed = results["https://storage.example.com/slot-2"]
        assert not failed.ok
        assert isinstance(failed.error, FileReadError)
        assert failed.status_code is None
        assert "missing.txt" in str(failed.error)
        # No request is made for the unreadable file
        assert len(recording_put.calls) == 2

    def test_non_2xx_is_failure_with_status(self, recording_put, make_file):
        """A rejected PUT keeps the status code and response body."""
        jobs = [_job(make_file("a.txt"), 1), _job(make_file("b.txt"), 2)]
        recording_put.statuses["https://storage.example.com/slot-2"] = 403

        results = {r.job.destination_url: r for r in FileUploader().upload_files(jobs)}

        assert results["https://storage.example.com/slot-1"].ok
        rejected = results["https://storage.example.com/slot-2"]
        assert not rejected.ok
        assert rejected.status_code == 403
        assert isinstance(rejected.error, RemoteRejectionError)
        assert rejected.error.body == "storage says no"

    def test_transport_error_is_recorded(self, recording_put, make_file):
        """Connection errors become TransportError results."""
        url = "https://storage.example.com/slot-1"
        recording_put.errors[url] = requests.ConnectionError("connection refused")
        jobs = [_job(make_file("a.txt"), 1), _job(make_file("b.txt"), 2)]

        results = FileUploader().upload_files(jobs)

        assert len(results) == 2
        assert len(failed_results(results)) == 1
        failed = failed_results(results)[0]
        assert failed.job.destination_url == url
        assert isinstance(failed.error, TransportError)

    def test_sends_file_content_and_headers(self, recording_put, make_file):
        """The PUT body is the whole file and the job headers are attached."""
        path = make_file("doc.json", b'{"a": 1}')
        job = _job(path, 7, headers={"Content-Type": "application/json"})

        FileUploader(timeout=5).upload_files([job])

        assert recording_put.calls == [
            {
                "url": "https://storage.example.com/slot-7",
                "data": b'{"a": 1}',
                "headers": {"Content-Type": "application/json"},
                "timeout": 5,
            }
        ]

    @pytest.mark.parametrize("count", [1, 5, 17])
    def test_one_result_per_job(self, recording_put, make_file, count):
        """The number of results always equals the number of jobs."""
        jobs = [_job(make_file(f"f{i}.bin"), i) for i in range(count)]
        recording_put.statuses["https://storage.example.com/slot-0"] = 500

        results = FileUploader(concurrency_limit=4).upload_files(jobs)

        assert len(results) == count
        assert {r.job for r in results} == set(jobs)


class TestConcurrencyLimit:
    """Tests for the bound on in-flight uploads."""

    def test_never_exceeds_limit(self, monkeypatch, make_file):
        """At most concurrency_limit PUTs run at the same time."""
        lock = threading.Lock()
        state = {"in_flight": 0, "max": 0}

        class Response:
            status_code = 200
            text = ""

        def slow_put(url, data=None, headers=None, timeout=None):
            with lock:
                state["in_flight"] += 1
                state["max"] = max(state["max"], state["in_flight"])
            time.sleep(0.02)
            with lock:
                state["in_flight"] -= 1
            return Response()

        monkeypatch.setattr("fieldagent.upload.uploader.requests.put", slow_put)
        jobs = [_job(make_file(f"f{i}.bin"), i) for i in range(20)]

        results = FileUploader(concurrency_limit=3).upload_files(jobs)

        assert len(results) == 20
        assert all(r.ok for r in results)
        assert 1 <= state["max"] <= 3

    def test_uploads_run_in_parallel(self, monkeypatch, make_file):
        """With limit >= batch size, all uploads are in flight together."""
        barrier = threading.Barrier(3, timeout=5)

        class Response:
            status_code = 201
            text = ""

        def waiting_put(url, data=None, headers=None, timeout=None):
            barrier.wait()
            return Response()

        monkeypatch.setattr("fieldagent.upload.uploader.requests.put", waiting_put)
        jobs = [_job(make_file(f"f{i}.bin"), i) for i in range(3)]

        results = FileUploader(concurrency_limit=6).upload_files(jobs)

        assert all(r.ok for r in results)

    def test_unexpected_error_stays_on_its_job(self, monkeypatch, make_file):
        """Errors outside the expected taxonomy do not abort the batch."""

        class Response:
            status_code = 200
            text = ""

        def flaky_put(url, data=None, headers=None, timeout=None):
            if url.endswith("slot-1"):
                raise RuntimeError("boom")
            return Response()

        monkeypatch.setattr("fieldagent.upload.uploader.requests.put", flaky_put)
        jobs = [_job(make_file(f"f{i}.bin"), i) for i in range(3)]

        results = FileUploader().upload_files(jobs)

        assert len(results) == 3
        failed = failed_results(results)
        assert [r.job.destination_url for r in failed] == ["https://storage.example.com/slot-1"]
        assert "boom" in str(failed[0].error)

    def test_rejects_invalid_limit(self):
        with pytest.raises(ValueError):
            FileUploader(concurrency_limit=0)

    def test_from_config(self, client_config):
        uploader = FileUploader.from_config(client_config.model_copy(update={"concurrency_limit": 2}))
        assert uploader.concurrency_limit == 2
        assert uploader.timeout == client_config.timeout


class TestJobsForUploads:
    """Tests for pairing upload slots with local files."""

    def test_pairs_by_index(self, tmp_path):
        uploads = [
            FileUpload(id="k1", upload_url="https://s/1", headers={"h": "1"}),
            FileUpload(id="k2", upload_url="https://s/2", headers={"h": "2"}),
        ]
        paths = [tmp_path / "b.jpg", tmp_path / "a.jpg"]

        jobs = jobs_for_uploads(uploads, paths)

        assert [(j.destination_url, j.local_path) for j in jobs] == [
            ("https://s/1", tmp_path / "b.jpg"),
            ("https://s/2", tmp_path / "a.jpg"),
        ]
        assert jobs[1].headers == {"h": "2"}

    def test_ignores_filename_in_storage_url(self, tmp_path):
        """Pairing never depends on the filename embedded in s3_url."""
        uploads = [FileUpload(id="k1", upload_url="https://s/1", s3_url="s3://bucket/other.jpg")]
        jobs = jobs_for_uploads(uploads, [tmp_path / "mine.jpg"])
        assert jobs[0].local_path == tmp_path / "mine.jpg"

    def test_mismatched_counts_raise(self, tmp_path):
        uploads = [FileUpload(id="k1", upload_url="https://s/1")]
        with pytest.raises(WorkflowError, match="1 upload slots for 2 files"):
            jobs_for_uploads(uploads, [tmp_path / "a", tmp_path / "b"])


class TestSummarizeResults:
    """Tests for the per-job summary table."""

    def test_names_failed_file(self, recording_put, make_file, tmp_path):
        jobs = [_job(make_file("good.txt"), 1), _job(tmp_path / "absent.txt", 2)]
        results = FileUploader().upload_files(jobs)
        console = Console(record=True, width=200)

        summarize_results(results, console)

        output = console.export_text()
        assert "good.txt" in output
        assert "absent.txt" in output
        assert "OK" in output
        assert "FAILED" in output
        assert "200" in output
