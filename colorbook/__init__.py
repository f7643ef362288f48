"""
colorbook - 上色页报告生成核心模块

模块结构：
- config/     配置加载与版式规范解析
- models/     数据模型定义
- doc_gen/    文档排版（几何/图像适配/富文本/折行/表格分页/组装/PDF导出）
- pipeline/   流水线编排与任务执行
"""

__version__ = "0.1.0"
