"""
Report Engine.

Builds the manager's applicant report: one row per application joined
with its applicant's details, narrowed by ReportCriteria.
"""

from ..models import ApplicantReportRow, ReportCriteria
from ..store import HousingStore


class ReportEngine:

    def __init__(self, store: HousingStore):
        self.store = store

    def applicant_report(self, criteria: ReportCriteria = None) -> list:
        """
        Returns:
            List of ApplicantReportRow, in application order
        """
        criteria = criteria or ReportCriteria()
        rows = []
        for application in self.store.applications:
            if criteria.statuses and application.status not in criteria.statuses:
                continue
            if criteria.project_name and application.project_name != criteria.project_name:
                continue
            if criteria.flat_kinds and application.flat_kind not in criteria.flat_kinds:
                continue

            person = self.store.people.find_by_key(application.applicant_nric)
            if person is None:
                continue
            if criteria.ages and person.age not in criteria.ages:
                continue
            if criteria.marital_statuses and person.marital_status not in criteria.marital_statuses:
                continue

            project = self.store.projects.find_by_key(application.project_name)
            rows.append(ApplicantReportRow(
                application_id=application.id,
                name=person.name,
                nric=person.nric,
                age=person.age,
                marital_status=person.marital_status,
                project_name=application.project_name,
                neighborhood=project.neighborhood if project else "",
                flat_kind=application.flat_kind,
                status=application.status,
            ))
        return rows
