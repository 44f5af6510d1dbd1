"""独立测试脚本：测试 build 流水线（配置 -> 组装查询 -> 输出 -> JSON 回读）

该脚本使用硬编码的配置，依次验证：
1. 配置中的每条查询都能组装成合法的查询串和搜索 URL
2. JsonFileWriter 写出的 JSON 可以回读，且回读后的查询串经解析再组装保持不变
不依赖外部配置文件，所有测试数据都在代码中定义。
"""

import json
import sys
import tempfile
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "src"))

from XQueryBuilder.config import parse_config_dict
from XQueryBuilder.renderers import ConsoleOutputWriter, JsonFileWriter, MultiOutputWriter
from XQueryBuilder.services import create_query_service

# ============================================================================
# 全局配置参数 - 可根据需要修改
# ============================================================================

TEST_ACTION_NAME = "build"  # 测试的命令名称（用于文件名）

RAW_CONFIG = {
    "search": {"domain": "x.com", "tab": "top"},
    "queries": [
        {"NAME": "ai-or", "keywords": ["AI", "ChatGPT"], "keyword_mode": "or", "language": "en"},
        {"NAME": "quality", "PRESET": "quality", "any_keywords": ["LLM", "agent"]},
        {"NAME": "from-query", "QUERY": 'from:OpenAI near:"San Francisco" within:10km ?'},
        {"NAME": "custom", "keywords": ["rust"], "custom_operators": ["url:github.com, -filter:media"]},
    ],
    "output": {"formats": ["console", "json"]},
    "storage": {"enabled": False},
}


def compose_all():
    """组装配置中的全部查询"""
    cfg = parse_config_dict(RAW_CONFIG)
    service = create_query_service(cfg)
    return service, [service.compose(q.params, name=q.name) for q in cfg.search.queries]


def test_compose_all_queries():
    """测试每条查询都能生成合法 URL"""
    _, results = compose_all()

    assert [r.name for r in results] == ["ai-or", "quality", "from-query", "custom"]
    for result in results:
        assert result.valid, result
        assert result.url.startswith("https://x.com/search?q=")
        assert result.url.endswith("&src=typed_query&f=top")

    by_name = {r.name: r.query for r in results}
    assert by_name["ai-or"] == "(AI OR ChatGPT) lang:en"
    assert by_name["quality"] == "(LLM OR agent) min_faves:300 -is:retweet -is:reply -filter:links"
    assert by_name["from-query"] == 'from:OpenAI near:"San Francisco" within:10km ?'
    assert by_name["custom"] == "rust url:github.com -filter:media"
    print("✓ 全部查询组装成功")


def test_json_reload_round_trip():
    """测试 JSON 输出回读后，查询串解析再组装保持不变"""
    service, results = compose_all()

    with tempfile.TemporaryDirectory() as tmp:
        json_writer = JsonFileWriter(tmp)
        writer = MultiOutputWriter([ConsoleOutputWriter(), json_writer])
        for result in results:
            writer.write_query_result(result)
        writer.finalize(TEST_ACTION_NAME)

        assert json_writer.output_path is not None
        data = json.loads(json_writer.output_path.read_text(encoding="utf-8"))

    assert len(data) == len(results)
    for item in data:
        assert service.normalize(item["query"]) == service.normalize(service.normalize(item["query"]))
        assert item["url"] == service.url_for(item["query"])
    print(f"✓ JSON 回读成功，共 {len(data)} 条")


def main():
    """运行所有测试"""
    print("\n" + "=" * 80)
    print("开始测试 build 流水线")
    print("=" * 80)

    test_compose_all_queries()
    test_json_reload_round_trip()

    print("\n" + "=" * 80)
    print("build 流水线测试通过！✓")
    print("=" * 80)


if __name__ == "__main__":
    main()
