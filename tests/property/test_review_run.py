"""
Property-based tests for review run invariants.
"""

import asyncio

from hypothesis import given, settings, strategies as st
from unittest.mock import Mock

from ai_review_action.api import AIReviewerAPI
from ai_review_action.llm.generator import ReviewGenerator
from ai_review_action.models.event import PullRequestEvent
from ai_review_action.models.review import PullRequestContext


names = st.text(alphabet='abcdefghijklmnopqrstuvwxyz', min_size=1, max_size=6).map(lambda s: s + '.py')


def file_diff(name, deleted):
    if deleted:
        return f"diff --git a/{name} b/{name}\ndeleted file mode 100644\n--- a/{name}\n+++ /dev/null\n@@ -1 +0,0 @@\n-x = 1\n"
    return f"diff --git a/{name} b/{name}\n--- a/{name}\n+++ b/{name}\n@@ -1 +1 @@\n-x = 1\n+x = 2\n"


class TestReviewRunProperties:
    """Property tests for AIReviewerAPI.run."""

    @settings(max_examples=30, deadline=None)
    @given(files=st.lists(st.tuples(names, st.booleans()), min_size=1, max_size=5, unique_by=lambda f: f[0]))
    def test_deleted_files_never_get_comments(self, files):
        """
        Property: deleted files are never sent to the model and never
        receive comments; every other file gets one comment per finding.
        """
        github = Mock()
        github.get_pull_request_context.return_value = PullRequestContext(
            owner='octo', repository='demo', pull_number=1
        )
        github.get_pull_request_diff.return_value = ''.join(file_diff(n, d) for n, d in files)
        model_client = Mock()
        model_client.complete.return_value = '{"reviews": [{"lineNumber": 1, "reviewComment": "Check"}]}'

        api = AIReviewerAPI(github, ReviewGenerator(model_client, model_name='m'))
        event = PullRequestEvent(action='opened', number=1, repository={'name': 'demo', 'owner': {'login': 'octo'}})

        result = asyncio.run(api.run(event))

        live = [name for name, deleted in files if not deleted]
        assert [c.path for c in result.comments] == live
        assert model_client.complete.call_count == len(live)
        assert all(c.path != '/dev/null' for c in result.comments)
