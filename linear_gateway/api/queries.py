"""
GraphQL documents for the Linear API.

Issue facets are separate queries so they can be resolved concurrently.
"""

ISSUE_QUERY = """
query Issue($id: String!) {
  issue(id: $id) {
    id
    identifier
    title
    description
  }
}
"""

ISSUE_LABELS_QUERY = """
query IssueLabels($id: String!, $first: Int!, $after: String) {
  issue(id: $id) {
    labels(first: $first, after: $after) {
      nodes {
        id
        name
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

ISSUE_ASSIGNEE_QUERY = """
query IssueAssignee($id: String!) {
  issue(id: $id) {
    assignee {
      id
      name
    }
  }
}
"""

ISSUE_STATE_QUERY = """
query IssueState($id: String!) {
  issue(id: $id) {
    state {
      id
      name
      type
    }
  }
}
"""

VIEWER_QUERY = """
query Viewer {
  viewer {
    id
    name
  }
}
"""

CREATE_COMMENT_MUTATION = """
mutation CommentCreate($input: CommentCreateInput!) {
  commentCreate(input: $input) {
    success
    comment {
      id
    }
  }
}
"""

UPDATE_ISSUE_MUTATION = """
mutation IssueUpdate($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue {
      id
    }
  }
}
"""
