from helpdesk.models import ProblemCreateRequest, ProblemReport, Urgency
from helpdesk.repositories import ProblemRepository


class ProblemService:
    def __init__(self, problem_repo: ProblemRepository):
        self.problem_repo = problem_repo

    async def create_problem(self, payload: ProblemCreateRequest) -> ProblemReport:
        """Store a problem report. Raises ValidationError for an unknown urgency label."""
        urgency = Urgency.normalize(payload.urgency)
        return await self.problem_repo.create(payload, urgency)
