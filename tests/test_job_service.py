import pytest

from chat_jobs.errors import InvalidMessage, JobNotFound, MessageTooLong
from chat_jobs.job_store import JobStatus
from chat_jobs.services.responder import DEFAULT_RESPONSE


def test_create_job_stores_trimmed_message_and_starts_pipeline(service, store, manual_pipeline):
    job = service.create_job("  hello   world \n")

    assert job.status is JobStatus.CREATED
    assert store.get(job.id).message == "hello   world"
    assert manual_pipeline.started == [job.id]


def test_get_job_right_after_create_is_created(service):
    job = service.create_job("hello")
    view = service.get_job(job.id)

    assert view.job_id == job.id
    assert view.status is JobStatus.CREATED
    assert view.result is None
    assert view.created_at == view.updated_at


def test_ids_are_fresh(service):
    ids = {service.create_job(f"message {i}").id for i in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize("message", ["", "   \t\n", None, 42, ["hi"], {"text": "hi"}])
def test_invalid_messages_rejected(service, store, manual_pipeline, message):
    with pytest.raises(InvalidMessage):
        service.create_job(message)
    assert len(store) == 0
    assert manual_pipeline.started == []


def test_too_long_message_rejected(service, store):
    with pytest.raises(MessageTooLong):
        service.create_job("a" * 1001)
    assert len(store) == 0


def test_length_limit_counts_untrimmed_text(service):
    service.create_job("a" * 1000)
    with pytest.raises(MessageTooLong):
        service.create_job("a" * 999 + "  ")


def test_length_limit_counts_code_points(service, store):
    emoji = "\U0001F600" * 600
    job = service.create_job(emoji)
    assert store.get(job.id).message == emoji

    with pytest.raises(MessageTooLong):
        service.create_job("\U0001F600" * 1001)


def test_type_is_kept(service, store):
    job = service.create_job("hello", type="support")
    assert store.get(job.id).type == "support"


def test_get_unknown_job(service):
    with pytest.raises(JobNotFound) as excinfo:
        service.get_job("not-a-real-id")
    assert excinfo.value.job_id == "not-a-real-id"


def test_result_appears_once_terminal(service, manual_pipeline):
    job = service.create_job("hello")
    manual_pipeline.run_all()

    view = service.get_job(job.id)
    assert view.status is JobStatus.COMPLETED
    assert view.result == DEFAULT_RESPONSE


def test_list_jobs_truncates_long_messages(service):
    short = service.create_job("short one")
    long = service.create_job("x" * 150)
    exact = service.create_job("y" * 100)

    listing = service.list_jobs()

    assert listing.total == 3
    assert [item.id for item in listing.jobs] == [short.id, long.id, exact.id]
    assert listing.jobs[0].message == "short one"
    assert listing.jobs[1].message == "x" * 100 + "..."
    assert listing.jobs[2].message == "y" * 100


def test_list_jobs_empty(service):
    listing = service.list_jobs()
    assert listing.jobs == []
    assert listing.total == 0
