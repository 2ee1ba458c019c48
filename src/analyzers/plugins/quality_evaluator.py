"""
This module contains the qualitative evaluator plugins for the ranking pipeline.
"""

from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError
from tiktoken import Encoding

from analyzers.models import QualitativeScore, SampledCommit
from analyzers.plugins.score_extractor import extract_score
from config import logger
from exceptions import EvaluatorFailure

SYSTEM_PROMPT = "You are an expert code reviewer. You answer with JSON only."

PROMPT_TEMPLATE = """Analyze the provided commit data for the repository named '{repo_name}'.
The data includes the total number of commits in the repository and a sample of {sample_count} individual commits, each with its commit message and a snippet of its diff (up to the first {line_limit} lines).

Based ONLY on the provided information for these sampled commits, evaluate the following:

1.  **Technical Sophistication (0-10 points):**
    From the diff snippets of the sampled commits, assess the complexity of the changes, the use of advanced techniques or technologies, and the ingenuity in problem-solving.
    A score of 1 means very simple changes (e.g., typo fixes, minor documentation updates).
    A score of 10 means highly complex changes involving significant architectural work, advanced algorithms, or novel technology applications.
    If diffs are empty or uninformative, assign a low score.

2.  **Commit Message Appropriateness (0-10 points):**
    For each sampled commit, evaluate how well its commit message aligns with its corresponding diff snippet.
    Does the message accurately and concisely describe what was changed in the diff?
    A score of 1 means the message is irrelevant, misleading, or completely uninformative regarding the diff.
    A score of 10 means the message perfectly and clearly describes the changes shown in the diff.
    Consider the average appropriateness across all sampled commits.

Please provide your evaluation STRICTLY in the following JSON format, with no other text before or after the JSON block:
{{
  "technical_sophistication": <integer_score_0_to_10_for_overall_repo_based_on_samples>,
  "message_appropriateness": <integer_score_0_to_10_for_average_message_quality_based_on_samples>
}}

Analysis Data:
{analysis_data}
"""


class QualityEvaluatorPlugin:
    """Base class for qualitative evaluator plugins."""

    async def evaluate(
        self,
        repo_name: str,
        total_commit_count: int,
        sampled_commits: List[SampledCommit],
    ) -> QualitativeScore:
        """Score the sampled commits of a repository."""
        pass


class LLMQualityEvaluatorPlugin(QualityEvaluatorPlugin):
    """
    LLM-based qualitative evaluator using OpenAI's GPT models.

    Renders the sampled commits into a rubric prompt, sends it once and
    extracts the structured score from the reply. Failed calls are not retried.

    Attributes:
        client (AsyncOpenAI): OpenAI API client
        encoding (tiktoken.Encoding): Token encoder used to measure prompts
        model (str): Chat completion model
        max_prompt_tokens (int): Prompt size that triggers a warning
        line_limit (int): Diff line budget quoted in the prompt
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        encoding: Encoding,
        model: str,
        max_prompt_tokens: int = 30000,
        line_limit: int = 100,
    ):
        """
        Initialize the LLM evaluator.

        Args:
            client (AsyncOpenAI): OpenAI API client
            encoding (Encoding): Token encoder for the model
            model (str): Chat completion model
            max_prompt_tokens (int): Prompt size that triggers a warning
            line_limit (int): Diff line budget quoted in the prompt
        """
        self.client = client
        self.encoding = encoding
        self.model = model
        self.max_prompt_tokens = max_prompt_tokens
        self.line_limit = line_limit

    def _count_tokens(self, text: str) -> int:
        """
        Count tokens in text using the model's tokenizer.

        Args:
            text (str): Text to count tokens for

        Returns:
            int: Number of tokens in text
        """
        return len(self.encoding.encode(text))

    def _prepare_analysis_data(
        self,
        repo_name: str,
        total_commit_count: int,
        sampled_commits: List[SampledCommit],
    ) -> str:
        parts = [
            f"Repository: {repo_name}",
            f"Total Commits in Repository: {total_commit_count}",
            "",
            f"Analyzing {len(sampled_commits)} randomly sampled commits:",
        ]
        for i, commit in enumerate(sampled_commits, start=1):
            parts.extend(
                [
                    "",
                    f"--- Sampled Commit {i} ---",
                    "Commit Message:",
                    commit.message,
                    "",
                    f"Commit Diff (first {self.line_limit} lines or less):",
                    commit.diff_snippet,
                ]
            )
        return "\n".join(parts)

    def _prepare_prompt(
        self,
        repo_name: str,
        total_commit_count: int,
        sampled_commits: List[SampledCommit],
    ) -> str:
        """
        Prepare the evaluation prompt.

        Args:
            repo_name (str): Repository name
            total_commit_count (int): Total commits in the repository
            sampled_commits (List[SampledCommit]): Packaged samples

        Returns:
            str: Formatted prompt for the LLM
        """
        return PROMPT_TEMPLATE.format(
            repo_name=repo_name,
            sample_count=len(sampled_commits),
            line_limit=self.line_limit,
            analysis_data=self._prepare_analysis_data(
                repo_name, total_commit_count, sampled_commits
            ),
        )

    async def _complete(self, prompt: str) -> Optional[str]:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
            timeout=120,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def evaluate(
        self,
        repo_name: str,
        total_commit_count: int,
        sampled_commits: List[SampledCommit],
    ) -> QualitativeScore:
        """
        Score the sampled commits of a repository with the LLM.

        Args:
            repo_name (str): Repository name
            total_commit_count (int): Total commits in the repository
            sampled_commits (List[SampledCommit]): Packaged samples

        Returns:
            QualitativeScore: Extracted scores

        Raises:
            EvaluatorFailure: If the API call fails or returns no content
            EvaluatorParseFailure: If the reply holds no valid score object
        """
        prompt = self._prepare_prompt(repo_name, total_commit_count, sampled_commits)
        token_count = self._count_tokens(prompt)
        logger.info(
            {
                "message": "Sending evaluation prompt",
                "repository": repo_name,
                "total_commits": total_commit_count,
                "sampled": len(sampled_commits),
                "prompt_tokens": token_count,
            }
        )
        if token_count > self.max_prompt_tokens:
            logger.warning(
                {
                    "message": "Evaluation prompt is very long",
                    "repository": repo_name,
                    "prompt_tokens": token_count,
                    "max_prompt_tokens": self.max_prompt_tokens,
                }
            )

        try:
            content = await self._complete(prompt)
        except OpenAIError as e:
            raise EvaluatorFailure(f"evaluator request failed for {repo_name}: {e}") from e

        if not content:
            raise EvaluatorFailure(f"evaluator response is empty for {repo_name}")

        logger.debug(
            {"message": "Evaluator raw response", "repository": repo_name, "raw": content}
        )
        return extract_score(content)
