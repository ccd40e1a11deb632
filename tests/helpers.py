from schedulehub.model import ScheduleEntry


def make_entry(entry_id: str, supervisor: str, examiner1: str, examiner2=None, location="Hall A", student="X"):
    return ScheduleEntry(
        id=entry_id,
        student_name=student,
        supervisor=supervisor,
        examiner1=examiner1,
        examiner2=examiner2,
        date="2024-05-12",
        start_time="09:00",
        location=location,
    )
